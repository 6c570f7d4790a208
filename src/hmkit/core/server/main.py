"""Server entry point — ``python -m hmkit.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from hmkit.core.config.settings import get_settings
from hmkit.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.hmkit_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.hmkit_allow_insecure_bind and not _is_loopback_host(settings.hmkit_host):
        raise RuntimeError(
            "Refusing to bind to a non-loopback host without an auth layer. "
            "Set HMKIT_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting Health Metrics Kit server on %s:%d (environment=%s)",
        settings.hmkit_host,
        settings.hmkit_port,
        settings.health_data_environment,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.hmkit_host,
        port=settings.hmkit_port,
    )


if __name__ == "__main__":
    run()
