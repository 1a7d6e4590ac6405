"""MCP stdio server.

Run standalone:  osquery-tools-mcp  (or python -m osquery_tools.mcp_server)
External use:    Claude Desktop, Cursor, or any MCP client via stdio
"""

from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from osquery_tools.config import settings
from osquery_tools.services.registry import ToolRegistry
from osquery_tools.services.tools import build_tools
from osquery_tools.utils.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_server(registry: ToolRegistry) -> FastMCP:
    """One MCP tool per registry entry."""
    mcp = FastMCP("osquery")
    for tool in registry:
        mcp.add_tool(tool.handler, name=tool.name, description=tool.description)
    return mcp


def main() -> None:
    setup_logging()
    tools = build_tools(settings)
    asyncio.run(tools.executor.check_availability())

    registry = ToolRegistry.from_toolset(tools)
    log.info("mcp.starting", tools=len(registry))
    create_server(registry).run(transport="stdio")


if __name__ == "__main__":
    main()
