"""
Synthkit Datasets MCP Server

Exposes deterministic dataset generation, business type detection and the
dataset store as MCP tools.
"""

import logging
import sys
from contextlib import asynccontextmanager

import structlog

from synthkit.config import Settings

# stdout carries the MCP protocol, so all logging goes to stderr
logging.basicConfig(
    format="%(message)s",
    stream=sys.stderr,
    level=logging.INFO,
)

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def app_lifespan(app):
    """Log startup configuration and shutdown."""
    settings = Settings.from_env()
    logger.info(
        "mcp_server_starting",
        version=VERSION,
        data_dir=str(settings.data_dir),
        base_url=settings.base_url,
        metric_availability_path=(
            str(settings.metric_availability_path)
            if settings.metric_availability_path
            else None
        ),
        cache_size=settings.cache_size,
        cache_ttl_seconds=settings.cache_ttl_seconds,
    )

    yield

    logger.info("mcp_server_stopping")


from synthkit_services.mcp_server.instance import VERSION, mcp  # noqa: E402

mcp.lifespan = app_lifespan

# Each module registers its tools with @mcp.tool(); import before mcp.run()
from synthkit_services.mcp_server.tools import (  # noqa: E402, F401
    datasets,
    generation,
    health_check,
)

logger.info(
    "mcp_server_initialized",
    tools=[
        "generate_dataset",
        "detect_business_type",
        "publish_dataset",
        "load_dataset",
        "health_check",
    ],
)


if __name__ == "__main__":
    mcp.run()
