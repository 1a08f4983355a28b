"""Error classification and error statistics for MCP GitHub Wiki Server."""

import logging
import time
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .wiki.errors import WikiError

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Classification of error severity levels."""

    HIGH = "high"  # Operation aborted, nothing reached the wiki
    MEDIUM = "medium"  # Remote side refused or was unreachable
    LOW = "low"  # Caller input problem, fix the arguments and call again


class ErrorCategory(str, Enum):
    """Failure categories reported to MCP clients as ``errorType``."""

    ACQUISITION = "acquisition"
    NOT_FOUND = "not_found"
    LOCAL_IO = "local_io"
    REMOTE_MUTATION = "remote_mutation"
    VALIDATION = "validation"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


_SEVERITY_BY_CATEGORY = {
    ErrorCategory.ACQUISITION: ErrorSeverity.MEDIUM,
    ErrorCategory.NOT_FOUND: ErrorSeverity.LOW,
    ErrorCategory.LOCAL_IO: ErrorSeverity.HIGH,
    ErrorCategory.REMOTE_MUTATION: ErrorSeverity.MEDIUM,
    ErrorCategory.VALIDATION: ErrorSeverity.LOW,
    ErrorCategory.UNKNOWN_TOOL: ErrorSeverity.LOW,
    ErrorCategory.INTERNAL: ErrorSeverity.HIGH,
}


class UnknownToolError(Exception):
    """Raised when a tool name is not in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ErrorContext:
    """Context information about an error raised by a wiki tool."""

    def __init__(
        self,
        error: Exception,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        severity: Optional[ErrorSeverity] = None,
        operation: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.category = category
        self.severity = severity or _SEVERITY_BY_CATEGORY[category]
        self.operation = operation
        self.metadata = metadata or {}
        self.error_time = time.time()

    @property
    def message(self) -> str:
        if isinstance(self.error, ValidationError):
            return format_validation_error(self.error)
        return str(self.error)


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic validation errors as one readable line"""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid arguments: " + "; ".join(problems)


def classify_error(error: Exception, operation: str = "") -> ErrorContext:
    """
    Classify an error and create an appropriate ErrorContext.

    Args:
        error: The exception that occurred
        operation: The tool during which the error occurred

    Returns:
        ErrorContext with the category reported to the client
    """
    if isinstance(error, WikiError):
        category = ErrorCategory(error.category)
    elif isinstance(error, ValidationError):
        category = ErrorCategory.VALIDATION
    elif isinstance(error, UnknownToolError):
        category = ErrorCategory.UNKNOWN_TOOL
    elif isinstance(error, OSError):
        category = ErrorCategory.LOCAL_IO
    else:
        category = ErrorCategory.INTERNAL

    return ErrorContext(error=error, category=category, operation=operation)


# Error metrics tracking
_error_stats: Dict[str, Any] = {
    "total_errors": 0,
    "errors_by_category": {},
    "errors_by_severity": {severity.value: 0 for severity in ErrorSeverity},
}


def record_error_metric(context: ErrorContext) -> None:
    """Record error metrics for monitoring and analysis."""
    _error_stats["total_errors"] += 1

    category = context.category.value
    _error_stats["errors_by_category"][category] = (
        _error_stats["errors_by_category"].get(category, 0) + 1
    )
    _error_stats["errors_by_severity"][context.severity.value] += 1

    logger.debug(
        f"Recorded {context.severity.value} {category} error in {context.operation or 'unknown'}"
    )


def get_error_stats() -> Dict[str, Any]:
    """Get current error statistics."""
    return {
        "total_errors": _error_stats["total_errors"],
        "errors_by_category": dict(_error_stats["errors_by_category"]),
        "errors_by_severity": dict(_error_stats["errors_by_severity"]),
    }


def reset_error_stats() -> None:
    """Reset error statistics (useful for testing)."""
    global _error_stats
    _error_stats = {
        "total_errors": 0,
        "errors_by_category": {},
        "errors_by_severity": {severity.value: 0 for severity in ErrorSeverity},
    }
