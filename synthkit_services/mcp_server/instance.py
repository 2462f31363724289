"""
MCP Server Instance

Holds the FastMCP object that every tool module registers with. Import it
from here (not from main.py) to avoid circular imports:

- instance.py: creates the mcp object
- main.py: configures logging and lifespan, imports tools and runs the server
- tools/*.py: register tools with @mcp.tool()
"""

from fastmcp import FastMCP

VERSION = "0.1.0"

mcp = FastMCP(name="Synthkit Datasets", version=VERSION)
