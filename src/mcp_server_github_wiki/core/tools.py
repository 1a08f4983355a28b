"""Tool registry and routing system for MCP GitHub Wiki Server"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import BaseModel

from ..error_handling import UnknownToolError
from ..wiki.models import (
    AppendToWikiPage,
    DeleteWikiPage,
    ListWikiPages,
    ReadWikiPage,
    WriteWikiPage,
)

logger = logging.getLogger(__name__)


class WikiTools(str, Enum):
    """Enumeration of all available wiki tools"""

    WRITE_PAGE = "write_wiki_page"
    READ_PAGE = "read_wiki_page"
    APPEND_TO_PAGE = "append_to_wiki_page"
    LIST_PAGES = "list_wiki_pages"
    DELETE_PAGE = "delete_wiki_page"


def _placeholder_handler(*args, **kwargs):
    raise RuntimeError("Handler not set")


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""

    name: str
    description: str
    schema: Type[BaseModel]
    handler: Callable[[BaseModel], Dict[str, Any]] = _placeholder_handler


class ToolRegistry:
    """Central registry for all wiki tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}
        self._initialized = False

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name] = tool_def
        logger.debug(f"Registered tool: {tool_def.name}")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [
            Tool(
                name=tool_def.name,
                description=tool_def.description,
                inputSchema=tool_def.schema.model_json_schema(),
            )
            for tool_def in self.tools.values()
        ]

    def initialize_default_tools(self):
        """Initialize registry with the wiki tools"""
        if self._initialized:
            return

        wiki_tools = [
            ToolDefinition(
                name=WikiTools.WRITE_PAGE.value,
                description=(
                    "Write or update a GitHub wiki page. Creates a new page or "
                    "overwrites an existing one with the provided content."
                ),
                schema=WriteWikiPage,
            ),
            ToolDefinition(
                name=WikiTools.READ_PAGE.value,
                description="Read the content of an existing GitHub wiki page.",
                schema=ReadWikiPage,
            ),
            ToolDefinition(
                name=WikiTools.APPEND_TO_PAGE.value,
                description=(
                    "Append content to a GitHub wiki page. Creates the page if it "
                    "does not exist; otherwise adds the content after a blank line."
                ),
                schema=AppendToWikiPage,
            ),
            ToolDefinition(
                name=WikiTools.LIST_PAGES.value,
                description="List all pages in a GitHub wiki with their file sizes.",
                schema=ListWikiPages,
            ),
            ToolDefinition(
                name=WikiTools.DELETE_PAGE.value,
                description="Delete an existing GitHub wiki page.",
                schema=DeleteWikiPage,
            ),
        ]

        for tool in wiki_tools:
            self.register(tool)

        self._initialized = True
        logger.info(f"Initialized tool registry with {len(self.tools)} tools")


class WikiToolRouter:
    """Router for dispatching tool calls to appropriate handlers"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self._handlers_initialized = False

    def set_handlers(self, wiki_handlers: Dict[str, Callable]):
        """Set up actual tool handlers"""
        for tool_name, handler in wiki_handlers.items():
            if tool_name in self.registry.tools:
                self.registry.tools[tool_name].handler = handler

        self._handlers_initialized = True
        logger.info("Tool handlers initialized")

    async def route_tool_call(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Validate arguments and run the tool's handler.

        Handlers block on git and disk, so they run in a worker thread.

        Raises:
            UnknownToolError: If no tool with that name is registered
            pydantic.ValidationError: If the arguments do not match the tool schema
            WikiError: If the wiki operation fails
        """
        if not self._handlers_initialized:
            raise RuntimeError("Tool handlers not initialized")

        tool_def = self.registry.get_tool(name)
        if tool_def is None:
            raise UnknownToolError(name)

        params = tool_def.schema.model_validate(arguments or {})
        return await asyncio.to_thread(tool_def.handler, params)
