from __future__ import annotations

"""
Warning Sink Capability.

The fixer reports every failure through an explicitly injected sink with a
single ``warn`` operation instead of reaching for an ambient logger.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from permfixer.infra.logging.config import PACKAGE_LOGGER_NAME


@runtime_checkable
class WarningSink(Protocol):
    """Anything able to receive a warning message."""

    def warn(self, message: str) -> None:
        ...


class LoggerWarningSink:
    """Forward warnings to a standard ``logging.Logger`` at WARNING level."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(PACKAGE_LOGGER_NAME)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def __repr__(self) -> str:
        return f"LoggerWarningSink({self.logger.name!r})"
