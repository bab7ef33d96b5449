"""Run-scoped logging helpers for graph execution.

Provides:
- Run ID generation (unique per Graph.run() call)
- Logging utility functions with a uniform message shape

Log Format:
    [<identifier>] action: key=value, key=value (duration)

Examples:
    [review-loop] run_start: run_id=20251228_143022_x7k, start=writer
    [review-loop] visit_start: node=writer, visit=1
    [review-loop] visit_complete: node=writer, visit=1, next=reviewer (1.2s)
    [review-loop] run_complete: visits=4 (3.5s)
"""

from __future__ import annotations

import logging
import random
import string
import time
from typing import Any


def generate_run_id() -> str:
    """Generate a unique run ID.

    Format: YYYYMMDD_HHMMSS_xxxxxx
    - Timestamp at second precision
    - 6-char random suffix to avoid collision between concurrent runs

    Returns:
        Run ID string like "20251228_143022_x7k2qa"
    """
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{timestamp}_{suffix}"


def truncate(value: Any, max_length: int = 100) -> str:
    """Truncate a value for logging.

    Args:
        value: Value to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated string with length indicator if truncated.
    """
    s = str(value)
    if len(s) <= max_length:
        return s
    return f"{s[:max_length]}... ({len(s)} chars)"


def _format(identifier: str, action: str, kwargs: dict[str, Any]) -> str:
    kv_pairs = ", ".join(f"{k}={truncate(v)}" for k, v in kwargs.items())
    return f"[{identifier}] {action}: {kv_pairs}" if kv_pairs else f"[{identifier}] {action}"


def log_start(
    logger: logging.Logger | None,
    identifier: str,
    action: str,
    **kwargs: Any,
) -> None:
    """Log a start event at DEBUG.

    Args:
        logger: Logger to use. If None, this is a no-op.
        identifier: Primary identifier (graph name).
        action: Action name (e.g., "run_start", "visit_start").
        **kwargs: Additional key=value pairs to log.
    """
    if logger is None:
        return
    logger.debug(_format(identifier, action, kwargs))


def log_complete(
    logger: logging.Logger | None,
    identifier: str,
    action: str,
    duration_s: float,
    **kwargs: Any,
) -> None:
    """Log a completion event with duration at DEBUG.

    Args:
        logger: Logger to use. If None, this is a no-op.
        identifier: Primary identifier.
        action: Action name (e.g., "run_complete", "visit_complete").
        duration_s: Duration in seconds.
        **kwargs: Additional key=value pairs to log.
    """
    if logger is None:
        return
    logger.debug(f"{_format(identifier, action, kwargs)} ({duration_s:.1f}s)")


def log_error(
    logger: logging.Logger | None,
    identifier: str,
    action: str,
    error: str | BaseException,
    **kwargs: Any,
) -> None:
    """Log an error event.

    Args:
        logger: Logger to use. If None, this is a no-op.
        identifier: Primary identifier.
        action: Action name (e.g., "visit_failed", "run_failed").
        error: Error message or exception.
        **kwargs: Additional key=value pairs to log.
    """
    if logger is None:
        return
    kwargs["error"] = truncate(str(error), max_length=200)
    logger.error(_format(identifier, action, kwargs))


def log_warning(
    logger: logging.Logger | None,
    identifier: str,
    action: str,
    **kwargs: Any,
) -> None:
    """Log a warning event."""
    if logger is None:
        return
    logger.warning(_format(identifier, action, kwargs))


def log_info(
    logger: logging.Logger | None,
    identifier: str,
    action: str,
    **kwargs: Any,
) -> None:
    """Log an info event."""
    if logger is None:
        return
    logger.info(_format(identifier, action, kwargs))
