"""Entry point for running the MCP server as a module.

    python -m synthkit_services.mcp_server
"""

import sys


def main() -> None:
    # Importing main registers every tool
    from synthkit_services.mcp_server.main import mcp

    mcp.run()


if __name__ == "__main__":
    try:
        main()
    except ImportError as e:
        print(f"Error: Failed to import MCP server: {e}", file=sys.stderr)
        print("Ensure the package is installed (pip install -e .)", file=sys.stderr)
        sys.exit(1)
