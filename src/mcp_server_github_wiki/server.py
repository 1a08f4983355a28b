"""MCP GitHub Wiki Server.

Exposes write, read, append, list and delete tools for GitHub wiki pages over
the Model Context Protocol on stdio.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import WikiServerSettings, load_environment_variables
from .core.handlers import CallToolHandler
from .logging_config import configure_logging

SERVER_NAME = "github-wiki-mcp"


def create_server(handler: CallToolHandler) -> Server:
    """Create the MCP server and register the wiki tools on it"""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return available wiki tools"""
        return handler.registry.list_tools()

    # Arguments are validated by the tool models so failures keep the JSON result shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Run a wiki tool; a raised ToolCallError becomes an isError response"""
        return await handler.call_tool(name, arguments)

    return server


async def serve(env_dir: Path | None = None, test_mode: bool = False) -> None:
    load_environment_variables(env_dir)
    settings = WikiServerSettings.from_env()
    configure_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"🚀 Starting MCP GitHub Wiki Server (host={settings.host}, branch={settings.branch})")

    handler = CallToolHandler(settings)
    server = create_server(handler)

    if test_mode:
        logger.info("🧪 Running in test mode - staying alive briefly for CI testing")
        await asyncio.sleep(1)
        logger.info("🧪 Test mode completed successfully")
        return

    options = server.create_initialization_options()
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("🔗 STDIO server connected. Waiting for requests...")
            await server.run(read_stream, write_stream, options, raise_exceptions=False)
    except KeyboardInterrupt:
        logger.info("⌨️ Server interrupted by user")
        raise
    finally:
        logger.info("MCP GitHub Wiki Server shutting down.")
