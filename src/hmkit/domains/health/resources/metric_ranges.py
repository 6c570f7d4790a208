"""MCP Resources for metric reference ranges."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from hmkit.domains.health.domain_logic import validator
from hmkit.domains.health.domain_logic.metric_models import (
    GENERATION_RULES,
    HARD_BOUNDS,
    METRIC_NAMES,
    MIN_VALID_METRICS,
)


def register_metric_range_resources(mcp: FastMCP) -> None:
    """Register metric range discovery resources on the MCP server."""

    @mcp.resource("metrics://health/ranges")
    def health_metric_ranges_resource() -> str:
        """Hard bounds, advisory thresholds and mock generation ranges per metric."""
        return json.dumps(
            {
                "min_valid_metrics": MIN_VALID_METRICS,
                "metrics": [
                    {
                        "name": name,
                        "hard_bounds": {
                            "low": HARD_BOUNDS[name].low,
                            "high": HARD_BOUNDS[name].high,
                        },
                        "mock_range": {
                            "low": GENERATION_RULES[name].range.low,
                            "high": GENERATION_RULES[name].range.high,
                        },
                    }
                    for name in METRIC_NAMES
                ],
                "advisory_thresholds": {
                    "steps_low": validator.STEPS_LOW,
                    "steps_high": validator.STEPS_HIGH,
                    "hrv_low_ms": validator.HRV_LOW_MS,
                    "resting_heart_rate_low_bpm": validator.RHR_LOW_BPM,
                    "resting_heart_rate_high_bpm": validator.RHR_HIGH_BPM,
                    "vo2_max_low": validator.VO2_MAX_LOW,
                    "sleep_low_hours": validator.SLEEP_LOW_HOURS,
                    "sleep_high_hours": validator.SLEEP_HIGH_HOURS,
                },
                "units": {
                    "sleep": "hours (records carry seconds)",
                },
            },
            indent=2,
        )
