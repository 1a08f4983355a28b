import logging
import json
import sys


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that gracefully handles closed streams during shutdown.
    """

    def handleError(self, record):
        # StreamHandler.emit reports write failures here instead of raising
        error = sys.exc_info()[1]
        if isinstance(error, (ValueError, OSError)):
            # Closed stderr during shutdown is expected
            message = str(error).lower()
            if "closed file" in message or "bad file descriptor" in message:
                return
        super().handleError(record)


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    CONTEXT_FIELDS = ("request_id", "tool", "duration_ms", "error_type")

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def configure_logging(log_level: str = "WARNING") -> None:
    """
    Centralized logging configuration for MCP GitHub Wiki Server.

    Logs go to stderr as JSON lines; stdout carries the MCP stream.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())
    # Clone URLs carry the token; keep GitPython's command logging quiet
    logging.getLogger("git").setLevel("WARNING")
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("mcp").setLevel("WARNING")
