from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A recording warning sink shared by the fixer tests.
3. A reset of the package logger between tests.
"""

import logging
import os
import sys
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from permfixer.infra.logging import PACKAGE_LOGGER_NAME, shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
class RecordingSink:
    """Warning sink that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Leave the package logger in its pristine state around each test."""
    yield
    shutdown_logging()
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
