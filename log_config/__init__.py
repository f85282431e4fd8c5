"""Logging configuration."""

from .logger import add_file_sinks, get_logger, log_throttled, logger, reset_throttle, set_console_level

__all__ = ["add_file_sinks", "get_logger", "log_throttled", "logger", "reset_throttle", "set_console_level"]
