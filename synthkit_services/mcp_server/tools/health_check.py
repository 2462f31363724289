"""Health Check MCP Tool

Reports whether the server can generate and store datasets:

1. MCP server status and uptime
2. Business type registry (metric availability table loads)
3. Dataset store directory
4. Dataset cache statistics
"""

import time
from datetime import datetime, timezone

import structlog
from fastmcp import Context
from pydantic import BaseModel, Field

from synthkit.exceptions import DatasetStoreError
from synthkit.registry.profiles import load_registry
from synthkit.storage.dataset_store import DatasetStore
from synthkit_services.mcp_server.cache import DatasetCache, get_dataset_cache
from synthkit_services.mcp_server.instance import mcp
from synthkit_services.mcp_server.state import get_server_state

logger = structlog.get_logger(__name__)


class HealthCheckResponse(BaseModel):
    """Health check response with system status."""

    status: str = Field(
        description="Overall health status: 'healthy', 'degraded', or 'unhealthy'"
    )
    timestamp: str = Field(description="ISO timestamp of health check")
    checks: dict[str, str] = Field(description="Individual component health checks")
    uptime_seconds: float = Field(description="Server uptime in seconds")
    business_types: list[str] = Field(
        default_factory=list, description="Registered business type keys"
    )
    cache_stats: dict[str, float] = Field(
        default_factory=dict, description="Dataset cache statistics"
    )


_SERVER_START_TIME = time.time()


async def _health_check_impl(
    ctx: Context,
    store: DatasetStore | None = None,
    cache: DatasetCache | None = None,
) -> HealthCheckResponse:
    logger.info("health_check_starting")
    state = get_server_state()
    checks: dict[str, str] = {"mcp_server": "healthy"}
    status = "healthy"

    business_types: list[str] = []
    try:
        registry = load_registry(state.settings.metric_availability_path)
        business_types = registry.keys()
        checks["registry"] = f"healthy ({len(business_types)} business types)"
    except (OSError, ValueError) as e:
        checks["registry"] = f"unhealthy: {e}"
        status = "unhealthy"
        logger.error("registry_check_failed", error=str(e))

    store = store or state.store
    if store.data_dir.is_dir():
        try:
            checks["dataset_store"] = f"healthy ({len(store.list_ids())} datasets)"
        except DatasetStoreError as e:
            checks["dataset_store"] = f"unhealthy: {e}"
            status = "unhealthy"
            logger.error("dataset_store_check_failed", error=str(e))
    elif store.data_dir.exists():
        checks["dataset_store"] = f"unhealthy: {store.data_dir} is not a directory"
        status = "unhealthy" if status == "unhealthy" else "degraded"
    else:
        # Created on first publish
        checks["dataset_store"] = f"empty ({store.data_dir} not created yet)"

    cache = cache or get_dataset_cache()
    cache_stats = cache.get_stats()
    checks["dataset_cache"] = f"healthy ({cache_stats['size']} entries)"

    uptime_seconds = time.time() - _SERVER_START_TIME
    await ctx.info(f"Health check complete: {status}")
    logger.info(
        "health_check_complete",
        status=status,
        checks=checks,
        uptime_seconds=uptime_seconds,
    )

    return HealthCheckResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
        uptime_seconds=uptime_seconds,
        business_types=business_types,
        cache_stats=cache_stats,
    )


@mcp.tool()
async def health_check(ctx: Context) -> HealthCheckResponse:
    """
    Check health of the MCP server and its collaborators.

    Returns:
        HealthCheckResponse with overall status and per-component checks
    """
    return await _health_check_impl(ctx)
