"""MCP Prompts — pre-built interaction templates for daily metric reviews."""

from __future__ import annotations

from fastmcp import FastMCP


def register_health_prompts(mcp: FastMCP) -> None:
    """Register health domain MCP prompts."""

    @mcp.prompt()
    def daily_health_review_prompt(date: str = "today") -> str:
        """Prompt template for reviewing one day of health metrics."""
        return f"""Please review my health metrics for {date}:

1. Fetch my steps, HRV, resting heart rate, VO₂Max and sleep duration
2. Validate them and point out anything outside the typical range
3. Tell me which metrics are missing, if any
4. Suggest one or two realistic things to focus on tomorrow

Keep it short and encouraging."""

    @mcp.prompt()
    def weekly_trend_prompt(days: int = 7) -> str:
        """Prompt template for reviewing metric trends over several days."""
        return f"""Let's look at my last {days} days of health metrics. I'd like to:

1. See how steps, HRV and resting heart rate moved day to day
2. Check whether my sleep duration was consistent
3. Spot any day with incomplete or unusual data
4. Get specific action items for the coming week"""
