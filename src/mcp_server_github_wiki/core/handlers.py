"""Tool call handlers for MCP GitHub Wiki Server"""

import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional

from mcp.types import TextContent

from ..config import WikiServerSettings
from ..error_handling import classify_error, record_error_metric, ErrorCategory
from ..metrics import MetricsCollector, global_metrics_collector
from ..wiki import operations
from ..wiki.models import OperationResult
from ..wiki.naming import redact_token
from .tools import ToolRegistry, WikiToolRouter, WikiTools

logger = logging.getLogger(__name__)


def to_text_content(result: OperationResult) -> List[TextContent]:
    """Render an operation result as the tool response text"""
    return [TextContent(type="text", text=result.to_json())]


class ToolCallError(Exception):
    """Carries a failed result out of a call_tool handler.

    The MCP server turns an exception raised by the handler into a response
    with isError set and the exception text as content, so the text is the
    JSON failure payload.
    """

    def __init__(self, result: OperationResult):
        super().__init__(result.to_json())
        self.result = result


def _safe_arguments(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Arguments for logging, without the token or page bodies"""
    safe = {}
    for key, value in (arguments or {}).items():
        if key == "token":
            safe[key] = "*****"
        elif key == "content" and isinstance(value, str):
            safe[key] = f"<{len(value)} chars>"
        else:
            safe[key] = value
    return safe


class CallToolHandler:
    """Centralized tool call handler using the router system"""

    def __init__(
        self,
        settings: Optional[WikiServerSettings] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.settings = settings or WikiServerSettings()
        self.metrics = metrics or global_metrics_collector
        self.registry = ToolRegistry()
        self.router = WikiToolRouter(self.registry)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up all tool handlers"""
        self.registry.initialize_default_tools()
        self.router.set_handlers(self._get_wiki_handlers())

    def _get_wiki_handlers(self) -> Dict[str, Callable]:
        """Bind each wiki tool to its operation"""
        settings = self.settings

        def write(params):
            return operations.write_wiki_page(
                params, params.page_name, params.content, params.commit_message, settings
            )

        def read(params):
            return operations.read_wiki_page(params, params.page_name, settings)

        def append(params):
            return operations.append_to_wiki_page(
                params, params.page_name, params.content, params.commit_message, settings
            )

        def list_pages(params):
            return operations.list_wiki_pages(params, settings)

        def delete(params):
            return operations.delete_wiki_page(
                params, params.page_name, params.commit_message, settings
            )

        return {
            WikiTools.WRITE_PAGE.value: write,
            WikiTools.READ_PAGE.value: read,
            WikiTools.APPEND_TO_PAGE.value: append,
            WikiTools.LIST_PAGES.value: list_pages,
            WikiTools.DELETE_PAGE.value: delete,
        }

    async def execute(self, name: str, arguments: Dict[str, Any]) -> OperationResult:
        """Run a tool and return its tagged result; never raises"""
        request_id = os.urandom(4).hex()
        log_context = {"request_id": request_id, "tool": name}
        logger.info(f"🔧 [{request_id}] Tool call: {name}", extra=log_context)
        logger.debug(
            f"🔧 [{request_id}] Arguments: {_safe_arguments(arguments)}", extra=log_context
        )

        start_time = time.time()
        try:
            payload = await self.router.route_tool_call(name, arguments)
            result = OperationResult.ok(**payload)
        except Exception as e:
            context = classify_error(e, operation=name)
            record_error_metric(context)
            token = (arguments or {}).get("token")
            message = context.message
            if isinstance(token, str):
                message = redact_token(message, token)
            result = OperationResult.fail(message, context.category.value)

            duration_ms = (time.time() - start_time) * 1000
            extra = {
                **log_context,
                "duration_ms": round(duration_ms, 1),
                "error_type": context.category.value,
            }
            if context.category == ErrorCategory.INTERNAL:
                logger.error(
                    f"❌ [{request_id}] Tool '{name}' failed: {message}", exc_info=True, extra=extra
                )
            else:
                logger.warning(f"⚠️ [{request_id}] Tool '{name}' failed: {message}", extra=extra)
        else:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"✅ [{request_id}] Tool '{name}' completed in {duration_ms / 1000:.2f}s",
                extra={**log_context, "duration_ms": round(duration_ms, 1)},
            )

        await self.metrics.record_tool_call(name, result.success, duration_ms, result.error_type)
        return result

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Main tool call entry point.

        Raises:
            ToolCallError: If the tool failed; carries the failure result
        """
        result = await self.execute(name, arguments)
        if result.is_error:
            raise ToolCallError(result)
        return to_text_content(result)
