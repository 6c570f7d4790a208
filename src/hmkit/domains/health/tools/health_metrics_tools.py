"""MCP tools for daily health metrics: access, fetch, validation, dashboard.

Provider failures are returned as a JSON error payload with
``"retryable": true`` rather than raised, so clients can offer a retry.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import date, datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from hmkit.domains.health.connectors.errors import HealthDataError
from hmkit.domains.health.domain_logic.dashboard import HealthDashboard
from hmkit.domains.health.domain_logic.use_cases import (
    FetchHealthMetricsUseCase,
    RequestPermissionsUseCase,
    ValidateHealthMetricsUseCase,
)

if TYPE_CHECKING:
    from hmkit.domains.health.connectors import HealthDataProvider

logger = logging.getLogger(__name__)

MAX_SUMMARY_DAYS = 31


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _parse_day(value: str | None) -> date:
    """Parse an ISO date (``YYYY-MM-DD``); empty means today in UTC."""
    if value in (None, ""):
        return datetime.now(timezone.utc).date()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"date must be YYYY-MM-DD, got {value!r}") from exc


def _error_payload(exc: Exception) -> str:
    """Provider errors are retryable; bad arguments are not."""
    return json.dumps({
        "status": "error",
        "error_type": type(exc).__name__,
        "message": str(exc),
        "retryable": isinstance(exc, HealthDataError),
    })


def register_health_metrics_tools(
    mcp: FastMCP,
    provider: HealthDataProvider,
) -> None:
    """Register daily health metric tools on the MCP server."""
    fetch_use_case = FetchHealthMetricsUseCase(provider)
    permissions_use_case = RequestPermissionsUseCase(provider)
    validate_use_case = ValidateHealthMetricsUseCase()

    @mcp.tool
    async def get_health_data_status(ctx: Context) -> str:
        """Report whether health data can be queried and where it comes from."""
        return json.dumps({
            "available": permissions_use_case.is_health_data_available(),
            "provenance": provider.get_provenance(),
        })

    @mcp.tool
    async def request_health_permissions(ctx: Context) -> str:
        """Request access to step count, HRV, resting heart rate, VO₂Max and sleep data."""
        try:
            await permissions_use_case.execute()
        except HealthDataError as exc:
            logger.info("Permission request failed: %s", exc)
            return _error_payload(exc)
        return json.dumps({"status": "granted", "data_source": provider.data_source})

    @mcp.tool
    async def fetch_health_metrics(ctx: Context, date: str = "") -> str:
        """Fetch the five daily health metrics for one day.

        Metrics the source has no data for are returned as null.

        Args:
            date: Day to fetch as YYYY-MM-DD (default: today, UTC). Future
                dates are rejected.
        """
        start_time = time.monotonic()
        try:
            day = _parse_day(date)
            metrics = await fetch_use_case.execute(day)
        except (HealthDataError, ValueError) as exc:
            return _error_payload(exc)
        elapsed_ms = (time.monotonic() - start_time) * 1000
        return json.dumps({
            "status": "ok",
            "metrics": metrics.to_dict(),
            "summary": str(metrics),
            "data_source": provider.data_source,
            "duration_ms": round(elapsed_ms, 1),
        })

    @mcp.tool
    async def validate_health_metrics(ctx: Context, date: str = "") -> str:
        """Fetch one day of metrics and check them against physiological ranges.

        Args:
            date: Day to validate as YYYY-MM-DD (default: today, UTC).
        """
        try:
            day = _parse_day(date)
            metrics = await fetch_use_case.execute(day)
        except (HealthDataError, ValueError) as exc:
            return _error_payload(exc)
        result = validate_use_case.execute(metrics)
        return json.dumps({
            "status": "ok",
            "date": day.isoformat(),
            "validation": result.to_dict(),
        })

    @mcp.tool
    async def get_health_dashboard(ctx: Context, date: str = "") -> str:
        """Dashboard view of one day: metrics, validation, completion and errors.

        Args:
            date: Day to show as YYYY-MM-DD (default: today, UTC).
        """
        try:
            day = _parse_day(date)
        except ValueError as exc:
            return _error_payload(exc)
        dashboard = HealthDashboard(fetch_use_case, permissions_use_case, validate_use_case)
        await dashboard.load(day)
        return json.dumps(dashboard.to_dict())

    @mcp.tool
    async def get_weekly_health_metrics(
        ctx: Context,
        end_date: str = "",
        days: int = 7,
    ) -> str:
        """Fetch consecutive days of metrics ending at ``end_date``.

        Args:
            end_date: Last day as YYYY-MM-DD (default: today, UTC).
            days: Number of days, 1 to 31 (default: 7).
        """
        if not 1 <= days <= MAX_SUMMARY_DAYS:
            return json.dumps({
                "status": "error",
                "message": f"days must be between 1 and {MAX_SUMMARY_DAYS}.",
                "retryable": False,
            })
        try:
            last_day = _parse_day(end_date)
            series: list[dict[str, Any]] = []
            for offset in range(days - 1, -1, -1):
                metrics = await fetch_use_case.execute(last_day - timedelta(days=offset))
                series.append(metrics.to_dict())
        except (HealthDataError, ValueError) as exc:
            return _error_payload(exc)
        return json.dumps({
            "status": "ok",
            "days": series,
            "data_source": provider.data_source,
        })
