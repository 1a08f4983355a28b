"""MCP GitHub Wiki Server core components"""

from .tools import ToolRegistry, WikiToolRouter, WikiTools
from .handlers import CallToolHandler, ToolCallError, to_text_content

__all__ = [
    "ToolRegistry",
    "WikiToolRouter",
    "WikiTools",
    "CallToolHandler",
    "ToolCallError",
    "to_text_content",
]
