"""SQLite database management for the health sample store.

Handles connection lifecycle, schema creation, and migrations.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

# Current schema version
SCHEMA_VERSION = 2

# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

_SCHEMA_V1 = """
-- One row per quantity or category sample
CREATE TABLE IF NOT EXISTS health_samples (
    id           TEXT PRIMARY KEY,
    sample_type  TEXT NOT NULL,
    kind         TEXT NOT NULL,          -- 'quantity' | 'category'
    start_date   TEXT NOT NULL,          -- ISO 8601, UTC
    end_date     TEXT NOT NULL,          -- ISO 8601, UTC

    -- Encrypted sample payload (quantity value or category value)
    value_enc    TEXT NOT NULL,
    unit         TEXT,
    source_name  TEXT,

    created_at   TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- Indexes for per-type day-window queries
CREATE INDEX IF NOT EXISTS idx_samples_type       ON health_samples(sample_type);
CREATE INDEX IF NOT EXISTS idx_samples_type_start ON health_samples(sample_type, start_date);
"""

# ---------------------------------------------------------------------------
# V2: Authorization table (per-type read/share grants)
# ---------------------------------------------------------------------------

_SCHEMA_V2 = """
CREATE TABLE IF NOT EXISTS authorizations (
    sample_type TEXT NOT NULL,
    access      TEXT NOT NULL,           -- 'read' | 'share'
    granted_at  TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (sample_type, access)
);
"""


class DatabaseError(Exception):
    """Raised when database operations fail."""


class SampleDatabase:
    """SQLite database manager for the health sample store.

    Supports both file-based and in-memory (`:memory:`) databases.
    In-memory mode is the default and is used for testing.

    Usage::

        db = SampleDatabase(":memory:")
        db.initialize()
        conn = db.connection
        # ... use connection ...
        db.close()
    """

    def __init__(self, db_path: str = ":memory:") -> None:
        """Initialize database manager.

        Args:
            db_path: Path to SQLite file, or ":memory:" for in-memory DB.
        """
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the active database connection.

        Raises:
            DatabaseError: If the database has not been initialized.
        """
        if self._conn is None:
            raise DatabaseError("Database not initialized. Call initialize() first.")
        return self._conn

    def initialize(self) -> None:
        """Create the database connection and ensure schema exists.

        For file-based databases, creates parent directories if needed.
        Idempotent: safe to call multiple times.
        """
        if self._conn is not None:
            return  # Already initialized

        if self._db_path != ":memory:":
            db_file = Path(self._db_path).expanduser()
            db_file.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(db_file))
        else:
            self._conn = sqlite3.connect(":memory:")

        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")

        self._ensure_schema()
        logger.info("Sample database initialized: %s", self._db_path)

    def _ensure_schema(self) -> None:
        """Create tables if they don't exist and apply migrations."""
        conn = self.connection

        conn.executescript(_SCHEMA_V1)

        cursor = conn.execute("SELECT MAX(version) FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row[0] is not None else 0

        if current_version < 2:
            conn.executescript(_SCHEMA_V2)
            logger.info("Applied schema migration V2: authorizations table")

        if current_version < SCHEMA_VERSION:
            conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )
            conn.commit()
            logger.info(
                "Schema updated from version %d to %d", current_version, SCHEMA_VERSION
            )

    def get_schema_version(self) -> int:
        """Return the current schema version."""
        cursor = self.connection.execute("SELECT MAX(version) FROM schema_version")
        row = cursor.fetchone()
        return row[0] if row[0] is not None else 0

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Sample database closed")

    def __enter__(self) -> SampleDatabase:
        self.initialize()
        return self

    def __exit__(self, *args) -> None:
        self.close()
