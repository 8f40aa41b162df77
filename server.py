# server.py

"""
MCP server exposing the deep-search tool over stdio.
"""

import asyncio
import signal
from typing import Optional, Union

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from config import Settings
from deep_search.service import TOOL_DESCRIPTION, TOOL_NAME, DeepSearchService
from utils.logger import setup_logger

logger = setup_logger(__name__)


def create_server(service: DeepSearchService) -> FastMCP:
    mcp = FastMCP("brave-deep-research-mcp")

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def deep_search(
        query: str,
        results: Optional[Union[int, float, str]] = None,
        depth: Optional[Union[int, float, str]] = None,
    ) -> str:
        """
        Args:
            query: Search query
            results: Number of search results to process (default: 3, max: 10).
                Values that are not numbers fall back to the default.
            depth: Depth of link traversal for each result (default: 1, max: 3)
        """
        result = await service.run_tool({"query": query, "results": results, "depth": depth})
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    logger.debug(f"Registered {TOOL_NAME} tool")
    return mcp


async def serve_stdio(settings: Settings):
    """
    Run the MCP server until stdin closes or the process is told to stop.
    SIGTERM cancels the server like Ctrl-C does; either way the shared
    browser is shut down before returning.
    """
    service = DeepSearchService.from_settings(settings)
    server = create_server(service)

    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    try:
        loop.add_signal_handler(signal.SIGTERM, task.cancel)
    except NotImplementedError:
        # Windows event loops have no signal handlers
        logger.debug("SIGTERM handler not installed")

    logger.info("MCP server running with stdio transport")
    try:
        await server.run_stdio_async()
    finally:
        logger.debug("Shutting down server")
        await service.close()
