"""Health sample store: the backing store the providers read from and write to.

Plays the role of the device health store: per-type permission negotiation,
statistics queries over a time window, and sample write/delete. Sample
values are encrypted at rest with :class:`FieldEncryptor`; aggregation
happens after decryption.
"""

from __future__ import annotations

import logging
import statistics as stats
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone

from hmkit.core.storage.database import SampleDatabase
from hmkit.core.storage.encryption import FieldEncryptor
from hmkit.core.storage.models import (
    ALL_SAMPLE_TYPES,
    CATEGORY_TYPES,
    QUANTITY_TYPES,
    QUANTITY_UNITS,
    HealthSample,
    StatisticsOption,
)

logger = logging.getLogger(__name__)

_TS_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class SampleStoreError(Exception):
    """Raised when sample store operations fail."""


class StoreUnavailableError(SampleStoreError):
    """The store cannot be queried at all on this host."""


class StoreAuthorizationError(SampleStoreError):
    """The caller has not been granted access to a sample type."""


class NoSamplesError(SampleStoreError):
    """A delete matched no samples."""


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_ts(value: datetime) -> str:
    return _to_utc(value).strftime(_TS_FORMAT)


def _from_ts(value: str) -> datetime:
    return datetime.strptime(value, _TS_FORMAT).replace(tzinfo=timezone.utc)


class HealthSampleStore:
    """Encrypted sample store with a per-type authorization model.

    Usage::

        db = SampleDatabase(":memory:")
        db.initialize()
        store = HealthSampleStore(db, FieldEncryptor(FieldEncryptor.generate_key()))
        store.request_authorization(read_types={STEP_COUNT}, share_types={STEP_COUNT})
        store.save_quantity_sample(STEP_COUNT, 8200, start)
        total = store.statistics(STEP_COUNT, start, end, StatisticsOption.CUMULATIVE_SUM)
    """

    def __init__(
        self,
        database: SampleDatabase,
        encryptor: FieldEncryptor,
        *,
        available: bool = True,
        authorization_policy: str = "grant",
    ) -> None:
        if authorization_policy not in ("grant", "deny"):
            raise ValueError(f"Unknown authorization policy: {authorization_policy!r}")
        self._db = database
        self._enc = encryptor
        self._available = available
        self._policy = authorization_policy

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    def is_available(self) -> bool:
        """Whether the store can be queried at all."""
        return self._available

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def request_authorization(
        self,
        read_types: Iterable[str] = (),
        share_types: Iterable[str] = (),
    ) -> bool:
        """Ask for read and share (write) access to the given sample types.

        Returns:
            True when every requested type was granted, False when the
            configured policy denies access.

        Raises:
            StoreUnavailableError: If the store is unavailable.
            ValueError: If an unknown sample type is requested.
        """
        self._require_available()
        grants = [(t, "read") for t in read_types] + [(t, "share") for t in share_types]
        for sample_type, _ in grants:
            self._check_type(sample_type)

        if self._policy == "deny":
            logger.info("Authorization denied for %d sample type grant(s)", len(grants))
            return False

        conn = self._db.connection
        conn.executemany(
            "INSERT OR IGNORE INTO authorizations (sample_type, access) VALUES (?, ?)",
            grants,
        )
        conn.commit()
        logger.info("Authorization granted for %d sample type grant(s)", len(grants))
        return True

    def is_authorized(self, sample_type: str, access: str = "read") -> bool:
        """Return True if ``access`` ('read' or 'share') was granted for the type."""
        row = self._db.connection.execute(
            "SELECT 1 FROM authorizations WHERE sample_type = ? AND access = ?",
            (sample_type, access),
        ).fetchone()
        return row is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_quantity_sample(
        self,
        sample_type: str,
        value: float,
        start: datetime,
        end: datetime | None = None,
        *,
        unit: str | None = None,
        source_name: str = "hmkit",
    ) -> str:
        """Persist a quantity sample. ``end`` defaults to ``start``.

        Returns:
            The sample ID.
        """
        if sample_type not in QUANTITY_TYPES:
            raise ValueError(f"Not a quantity sample type: {sample_type!r}")
        return self._insert(
            sample_type,
            "quantity",
            float(value),
            start,
            end or start,
            unit or QUANTITY_UNITS[sample_type],
            source_name,
        )

    def save_category_sample(
        self,
        sample_type: str,
        value: int,
        start: datetime,
        end: datetime,
        *,
        source_name: str = "hmkit",
    ) -> str:
        """Persist a category sample (e.g. one sleep interval).

        Returns:
            The sample ID.
        """
        if sample_type not in CATEGORY_TYPES:
            raise ValueError(f"Not a category sample type: {sample_type!r}")
        if end < start:
            raise ValueError("Category sample end must not precede its start")
        return self._insert(sample_type, "category", int(value), start, end, "", source_name)

    def _insert(
        self,
        sample_type: str,
        kind: str,
        value: float,
        start: datetime,
        end: datetime,
        unit: str,
        source_name: str,
    ) -> str:
        self._require_available()
        self._require_authorized(sample_type, "share")
        sid = self._new_id()
        conn = self._db.connection
        conn.execute(
            """INSERT INTO health_samples
               (id, sample_type, kind, start_date, end_date, value_enc, unit, source_name)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                sid,
                sample_type,
                kind,
                _to_ts(start),
                _to_ts(end),
                self._enc.encrypt(value),
                unit,
                source_name,
            ),
        )
        conn.commit()
        logger.debug("Saved %s sample %s at %s", sample_type, sid, _to_ts(start))
        return sid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def samples(
        self,
        sample_type: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HealthSample]:
        """Return decrypted samples whose start date lies in ``[start, end)``.

        Either bound may be None for an open-ended window. Results are
        ordered by start date.
        """
        self._require_available()
        self._require_authorized(sample_type, "read")
        query, params = self._window_query("SELECT *", sample_type, start, end)
        rows = self._db.connection.execute(query + " ORDER BY start_date", params).fetchall()
        return [self._row_to_sample(row) for row in rows]

    def statistics(
        self,
        sample_type: str,
        start: datetime,
        end: datetime,
        option: StatisticsOption,
    ) -> float | None:
        """Aggregate quantity samples in ``[start, end)``.

        Returns:
            The sum or mean of matching sample values, or None when no
            samples match.
        """
        if sample_type not in QUANTITY_TYPES:
            raise ValueError(f"Statistics require a quantity type, got {sample_type!r}")
        values = [s.value for s in self.samples(sample_type, start, end)]
        if not values:
            return None
        if option is StatisticsOption.CUMULATIVE_SUM:
            return float(sum(values))
        return float(stats.fmean(values))

    def count_samples(self, sample_type: str | None = None) -> int:
        """Count stored samples, optionally for a single type."""
        conn = self._db.connection
        if sample_type is None:
            row = conn.execute("SELECT COUNT(*) FROM health_samples").fetchone()
        else:
            row = conn.execute(
                "SELECT COUNT(*) FROM health_samples WHERE sample_type = ?",
                (sample_type,),
            ).fetchone()
        return row[0]

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete_samples(
        self,
        sample_type: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """Delete samples of one type whose start date lies in ``[start, end)``.

        Returns:
            Number of samples deleted.

        Raises:
            NoSamplesError: If no sample matched.
        """
        self._require_available()
        self._require_authorized(sample_type, "share")
        query, params = self._window_query("DELETE", sample_type, start, end)
        conn = self._db.connection
        cursor = conn.execute(query, params)
        conn.commit()
        if cursor.rowcount == 0:
            raise NoSamplesError(f"No {sample_type} samples to delete")
        logger.info("Deleted %d %s samples", cursor.rowcount, sample_type)
        return cursor.rowcount

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_available(self) -> None:
        if not self._available:
            raise StoreUnavailableError("Health sample store is not available on this host")

    def _require_authorized(self, sample_type: str, access: str) -> None:
        self._check_type(sample_type)
        if not self.is_authorized(sample_type, access):
            raise StoreAuthorizationError(
                f"Not authorized to {access} {sample_type} samples"
            )

    @staticmethod
    def _check_type(sample_type: str) -> None:
        if sample_type not in ALL_SAMPLE_TYPES:
            raise ValueError(f"Unknown sample type: {sample_type!r}")

    @staticmethod
    def _window_query(
        verb: str,
        sample_type: str,
        start: datetime | None,
        end: datetime | None,
    ) -> tuple[str, list[str]]:
        query = f"{verb} FROM health_samples WHERE sample_type = ?"
        params = [sample_type]
        if start is not None:
            query += " AND start_date >= ?"
            params.append(_to_ts(start))
        if end is not None:
            query += " AND start_date < ?"
            params.append(_to_ts(end))
        return query, params

    def _row_to_sample(self, row) -> HealthSample:
        return HealthSample(
            id=row["id"],
            sample_type=row["sample_type"],
            kind=row["kind"],
            start_date=_from_ts(row["start_date"]),
            end_date=_from_ts(row["end_date"]),
            value=self._enc.decrypt(row["value_enc"]),
            unit=row["unit"] or "",
            source_name=row["source_name"] or "",
        )
