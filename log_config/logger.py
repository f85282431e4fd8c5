"""Centralized logging configuration using loguru."""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

# Remove default handler
logger.remove()

_console_sink_id = logger.add(
    sys.stderr,
    level="INFO",
    format=CONSOLE_FORMAT,
    colorize=True,
)

_throttle_lock = threading.Lock()
_throttle_last: Dict[str, float] = {}


def set_console_level(level: str) -> None:
    """Replace the console sink with one at the given level."""
    global _console_sink_id
    logger.remove(_console_sink_id)
    _console_sink_id = logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)


def add_file_sinks(logs_dir: Path) -> None:
    """Add rotating conversion and error log files under ``logs_dir``.

    Args:
        logs_dir: Directory for log files (created if missing)
    """
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        logs_dir / "motion_computation_{time}.log",
        rotation="50 MB",
        retention="10 days",
        level="DEBUG",
        format=FILE_FORMAT,
        enqueue=True,  # Thread-safe logging
    )

    # Add error-specific log file
    logger.add(
        logs_dir / "errors_{time}.log",
        rotation="10 MB",
        retention="30 days",
        level="ERROR",
        format=FILE_FORMAT,
        enqueue=True,
    )


def get_logger(name: Optional[str] = None) -> Logger:
    """Get a logger instance with the given name.

    Args:
        name: Module name for the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


def log_throttled(
    key: str,
    period_s: float,
    message: str,
    level: str = "WARNING",
    log: Optional[Logger] = None,
) -> bool:
    """Emit ``message`` at most once per ``period_s`` for the given key.

    Args:
        key: Identifier of the throttled message stream
        period_s: Minimum seconds between two emitted messages
        message: Text to log
        level: Loguru level name
        log: Logger to use (defaults to the module logger)

    Returns:
        True if the message was emitted
    """
    now = time.monotonic()
    with _throttle_lock:
        last = _throttle_last.get(key)
        if last is not None and now - last < period_s:
            return False
        _throttle_last[key] = now
    (log or logger).log(level, message)
    return True


def reset_throttle() -> None:
    with _throttle_lock:
        _throttle_last.clear()


# Export configured logger
__all__ = [
    "logger",
    "get_logger",
    "add_file_sinks",
    "set_console_level",
    "log_throttled",
    "reset_throttle",
]
