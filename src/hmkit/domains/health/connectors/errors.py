"""Errors raised by HealthDataProvider implementations.

Every provider failure surfaces as a :class:`HealthDataError` subclass.
Underlying causes are chained (``raise ... from exc``) and kept on ``cause``.
"""

from __future__ import annotations


class HealthDataError(Exception):
    """Base class for health data access errors."""

    message = "Health data error"

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(self.describe())

    def describe(self) -> str:
        return self.message


class AccessDeniedError(HealthDataError):
    """The user or system declined access to health data."""

    message = "Health data access permission was denied"


class SourceUnavailableError(HealthDataError):
    """This host has no health data source at all."""

    message = "Health data is not available on this device"


class FetchFailedError(HealthDataError):
    """A query against the source failed; ``cause`` holds the detail."""

    message = "Failed to fetch health data"

    def describe(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class InvalidDataError(HealthDataError):
    """The request or the received data is outside the supported domain."""

    message = "Invalid health data received"


class UnknownHealthDataError(HealthDataError):
    """Access negotiation failed for an unexplained reason."""

    message = "Unknown health data error"

    def describe(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
