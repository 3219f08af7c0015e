from __future__ import annotations

from .config import PACKAGE_LOGGER_NAME, LoggingConfig
from .core import configure_logging, get_logger, shutdown_logging
from .sink import LoggerWarningSink, WarningSink

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "LoggingConfig",
    "LoggerWarningSink",
    "WarningSink",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
