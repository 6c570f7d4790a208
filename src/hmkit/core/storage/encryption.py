"""Fernet-based value encryption for health samples at rest.

Sample values are encrypted before writing to SQLite. Sample type and the
start/end timestamps stay in clear so day-window queries can use indexes.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""


class FieldEncryptor:
    """Encrypts and decrypts JSON-serializable values using Fernet.

    Usage::

        encryptor = FieldEncryptor(key="...")
        token = encryptor.encrypt(8123.0)
        encryptor.decrypt(token)  # 8123.0
    """

    def __init__(self, key: str) -> None:
        """Initialize with a Fernet key.

        Args:
            key: A valid Fernet key string. Generate with
                 :meth:`FieldEncryptor.generate_key`.

        Raises:
            EncryptionError: If the key is empty or invalid.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc

    def encrypt(self, data: Any) -> str:
        """Encrypt a JSON-serializable value to a Fernet token string."""
        if data is None:
            return ""
        try:
            plaintext = json.dumps(data, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncryptionError(f"Encryption failed: {exc}") from exc
        return self._fernet.encrypt(plaintext).decode("utf-8")

    def decrypt(self, token: str) -> Any:
        """Decrypt a Fernet token string back to a Python value.

        Raises:
            EncryptionError: If the token is invalid or the key is wrong.
        """
        if not token:
            return None
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
            return json.loads(plaintext)
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        except ValueError as exc:
            raise EncryptionError(f"Decryption failed: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new Fernet key."""
        return Fernet.generate_key().decode("utf-8")
