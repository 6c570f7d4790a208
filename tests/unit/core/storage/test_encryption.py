"""Tests for FieldEncryptor — Fernet encryption of sample values."""

from __future__ import annotations

import pytest

from hmkit.core.storage.encryption import EncryptionError, FieldEncryptor


@pytest.fixture
def encryptor() -> FieldEncryptor:
    return FieldEncryptor(FieldEncryptor.generate_key())


class TestInit:
    def test_empty_key_raises(self):
        with pytest.raises(EncryptionError, match="must not be empty"):
            FieldEncryptor("")

    def test_whitespace_key_raises(self):
        with pytest.raises(EncryptionError):
            FieldEncryptor("   ")

    def test_invalid_key_raises(self):
        with pytest.raises(EncryptionError, match="Invalid encryption key"):
            FieldEncryptor("not-a-fernet-key")


class TestEncryptDecrypt:
    def test_float_value(self, encryptor: FieldEncryptor):
        assert encryptor.decrypt(encryptor.encrypt(42.5)) == 42.5

    def test_integer_value(self, encryptor: FieldEncryptor):
        assert encryptor.decrypt(encryptor.encrypt(1)) == 1

    def test_token_hides_plaintext(self, encryptor: FieldEncryptor):
        token = encryptor.encrypt(12345.0)
        assert "12345" not in token

    def test_none_encrypts_to_empty(self, encryptor: FieldEncryptor):
        assert encryptor.encrypt(None) == ""
        assert encryptor.decrypt("") is None

    def test_wrong_key_raises(self, encryptor: FieldEncryptor):
        token = encryptor.encrypt(7.0)
        other = FieldEncryptor(FieldEncryptor.generate_key())
        with pytest.raises(EncryptionError, match="wrong key"):
            other.decrypt(token)

    def test_garbage_token_raises(self, encryptor: FieldEncryptor):
        with pytest.raises(EncryptionError):
            encryptor.decrypt("not-a-valid-token")

    def test_unserializable_value_raises(self, encryptor: FieldEncryptor):
        with pytest.raises(EncryptionError, match="Encryption failed"):
            encryptor.encrypt(object())


class TestGenerateKey:
    def test_generates_valid_key(self):
        key = FieldEncryptor.generate_key()
        assert isinstance(key, str)
        assert len(key) == 44  # base64-encoded 32 bytes

    def test_each_key_is_unique(self):
        keys = {FieldEncryptor.generate_key() for _ in range(10)}
        assert len(keys) == 10
