"""Centralized logging configuration for agentgraph.

The library itself only creates module loggers; nothing is configured on
import. Applications (and the CLI) call configure_logging() once.

Usage:
    from agentgraph.core.logging_config import configure_logging, set_level

    # Configure once at application startup
    configure_logging(level="DEBUG", format="text")

    # Turn up a single module later on
    set_level("DEBUG", "agentgraph.core.graph.executor")

Environment Variables:
    AGENTGRAPH_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    AGENTGRAPH_LOG_FORMAT: Output format ("text" or "json")
    AGENTGRAPH_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Literal

# Default format for text output
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_FORMAT_WITH_MS = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attributes every LogRecord carries; anything else was passed via extra=
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)

# Track if logging has been configured
_configured = False


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs logs as JSON objects with consistent structure:
    {
        "timestamp": "2025-12-28T14:30:00.123",
        "level": "DEBUG",
        "logger": "agentgraph.core.graph.executor",
        "message": "[review-loop] visit_start: node=writer, visit=1",
        "extra": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    include_ms: bool = True,
    force: bool = False,
) -> None:
    """Configure logging for the application.

    This should be called once at application startup. Subsequent calls
    are ignored unless force=True.

    Args:
        level: Log level. Defaults to AGENTGRAPH_LOG_LEVEL or "WARNING".
        format: Output format. Defaults to AGENTGRAPH_LOG_FORMAT or "text".
        file_path: Optional file path. Defaults to AGENTGRAPH_LOG_FILE.
        include_ms: Include milliseconds in timestamp.
        force: Force reconfiguration even if already configured.

    Raises:
        ValueError: If the level or format is not recognised.
    """
    global _configured
    if _configured and not force:
        return

    level = (level or os.environ.get("AGENTGRAPH_LOG_LEVEL", "WARNING")).upper()
    format = format or os.environ.get("AGENTGRAPH_LOG_FORMAT", "text")  # type: ignore[assignment]
    file_path = file_path or os.environ.get("AGENTGRAPH_LOG_FILE")

    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}', expected one of {', '.join(LOG_LEVELS)}")
    if format not in ("text", "json"):
        raise ValueError(f"Unknown log format '{format}', expected 'text' or 'json'")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))
    root_logger.handlers.clear()

    if format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        fmt = TEXT_FORMAT_WITH_MS if include_ms else TEXT_FORMAT
        formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True


def set_level(level: str, logger_name: str | None = None) -> None:
    """Set log level for a specific logger or the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        logger_name: Logger name. None for root logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper()))
