"""
Basic tests for MCP Server

Server identity and tool registration.
"""

import pytest
from synthkit_services.mcp_server.main import mcp


@pytest.mark.asyncio
async def test_mcp_server_initialization():
    """Test MCP server initializes correctly."""
    assert mcp.name == "Synthkit Datasets"
    assert mcp.version == "0.1.0"


def test_mcp_tools_module_imports():
    """Every tool module registers with the shared instance."""
    from synthkit_services.mcp_server.tools import (
        detect_business_type,
        generate_dataset,
        health_check,
        load_dataset,
        publish_dataset,
    )

    for tool in (
        detect_business_type,
        generate_dataset,
        health_check,
        load_dataset,
        publish_dataset,
    ):
        assert tool is not None
    assert hasattr(mcp, "tool")
