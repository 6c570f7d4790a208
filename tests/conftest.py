"""Shared test fixtures for Health Metrics Kit tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEALTH_DATA_ENVIRONMENT", "testing")
    monkeypatch.setenv("MOCK_LATENCY_SECONDS", "0")
    monkeypatch.setenv("SAMPLE_STORE_DB_PATH", ":memory:")
    monkeypatch.setenv("SAMPLE_STORE_AVAILABLE", "true")
    monkeypatch.setenv("SAMPLE_STORE_AUTHORIZATION", "grant")
    monkeypatch.setenv("ENCRYPTION_KEY", "")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_db():
    """Create an in-memory SampleDatabase for testing."""
    from hmkit.core.storage.database import SampleDatabase

    db = SampleDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def field_encryptor():
    """Create a FieldEncryptor with a test key."""
    from cryptography.fernet import Fernet

    from hmkit.core.storage.encryption import FieldEncryptor

    return FieldEncryptor(Fernet.generate_key().decode())


@pytest.fixture
def sample_store(sample_db, field_encryptor):
    """Create a HealthSampleStore (access granted on request) backed by in-memory SQLite."""
    from hmkit.core.storage.sample_store import HealthSampleStore

    return HealthSampleStore(sample_db, field_encryptor)


@pytest.fixture
def authorized_store(sample_store):
    """A sample store with read and share access granted for every sample type."""
    from hmkit.core.storage.models import ALL_SAMPLE_TYPES

    sample_store.request_authorization(
        read_types=ALL_SAMPLE_TYPES, share_types=ALL_SAMPLE_TYPES
    )
    return sample_store
