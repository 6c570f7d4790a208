"""Health Metrics Kit MCP Server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- build_sample_store() wiring the SQLite sample store from settings
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from hmkit.core.config.settings import Settings, get_settings
from hmkit.core.storage.database import SampleDatabase
from hmkit.core.storage.encryption import FieldEncryptor
from hmkit.core.storage.sample_store import HealthSampleStore
from hmkit.domains.health.connectors import HealthDataProvider
from hmkit.domains.health.connectors.providers import create_health_data_provider
from hmkit.domains.health.prompts.health_prompts import register_health_prompts
from hmkit.domains.health.resources.metric_ranges import register_metric_range_resources
from hmkit.domains.health.tools.health_metrics_tools import register_health_metrics_tools

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"


def build_sample_store(settings: Settings) -> HealthSampleStore:
    """Open the sample database and wrap it in an encrypted HealthSampleStore."""
    key = settings.encryption_key
    if not key:
        key = FieldEncryptor.generate_key()
        logger.info(
            "No ENCRYPTION_KEY configured — using an ephemeral key. "
            "Samples written now cannot be read by a later process."
        )
    encryptor = FieldEncryptor(key)

    database = SampleDatabase(settings.sample_store_db_path)
    database.initialize()
    logger.info(
        "Sample store initialized: %s (schema v%d)",
        settings.sample_store_db_path,
        database.get_schema_version(),
    )
    return HealthSampleStore(
        database,
        encryptor,
        available=settings.sample_store_available,
        authorization_policy=settings.sample_store_authorization,
    )


def create_app(
    *,
    health_data_provider_override: HealthDataProvider | None = None,
    sample_store_override: HealthSampleStore | None = None,
) -> FastMCP:
    """Create and configure the Health Metrics Kit MCP server.

    This is the main application factory and the dependency container. It:
    1. Creates the FastMCP server instance
    2. Builds the sample store (only when the environment needs one)
    3. Selects the HealthDataProvider for HEALTH_DATA_ENVIRONMENT
    4. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "Health Metrics Kit",
        instructions=(
            "Daily health metrics server. Provides step count, heart-rate "
            "variability, resting heart rate, VO₂Max and sleep duration for a "
            "given day, with physiological range validation."
        ),
    )

    # --- Initialize health data provider ---
    store: HealthSampleStore | None = sample_store_override
    if health_data_provider_override is not None:
        health_provider = health_data_provider_override
    else:
        if store is None and settings.health_data_environment != "testing":
            store = build_sample_store(settings)
        health_provider = create_health_data_provider(
            settings.health_data_environment,
            store,
            mock_latency_seconds=settings.mock_latency_seconds,
            injection_seed=settings.injection_seed,
        )
    logger.info(
        "Using %s health data provider (environment=%s)",
        health_provider.data_source,
        settings.health_data_environment,
    )

    # --- Register tools ---
    @server.tool
    async def health_check() -> dict:
        """Check server health and return basic status information."""
        status = {
            "status": "ok",
            "server": "Health Metrics Kit",
            "version": SERVER_VERSION,
            "environment": settings.health_data_environment,
            "data_source": health_provider.data_source,
            "health_data_available": health_provider.is_available(),
        }
        if store is not None:
            status["samples_stored"] = store.count_samples()
        return status

    register_health_metrics_tools(server, health_provider)
    logger.info("Health metrics tools registered")

    # --- Register resources ---
    register_metric_range_resources(server)

    # --- Register prompts ---
    register_health_prompts(server)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
