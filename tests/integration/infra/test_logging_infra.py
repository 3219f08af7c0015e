from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture on the package logger, idempotency
of configuration, log file rotation and the logger-backed warning sink.
"""

import logging
from pathlib import Path

from permfixer.infra.logging import (
    PACKAGE_LOGGER_NAME,
    LoggerWarningSink,
    LoggingConfig,
    WarningSink,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from permfixer.infra.logging.core import _QUEUE_LISTENER_ATTR
from permfixer.infra.logging.handlers import _HANDLER_TAG_ATTR


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    pkg_logger = configure_logging(cfg)
    initial_handler_count = len(pkg_logger.handlers)

    configure_logging(cfg)
    assert len(pkg_logger.handlers) == initial_handler_count, "Handlers were duplicated."

    configure_logging(cfg, force=True)
    assert len(pkg_logger.handlers) == initial_handler_count


def test_root_logger_is_left_alone() -> None:
    """TC-01: Only the package logger receives handlers."""
    root = logging.getLogger()
    before = list(root.handlers)

    pkg_logger = configure_logging(LoggingConfig(level="DEBUG"))

    assert pkg_logger.name == PACKAGE_LOGGER_NAME
    assert pkg_logger.propagate is False
    assert pkg_logger.level == logging.DEBUG
    assert root.handlers == before


def test_queue_listener_architecture() -> None:
    """TC-02: Verify that the package logger uses a QueueHandler-based architecture."""
    pkg_logger = configure_logging(LoggingConfig(level="INFO", console=True))

    ours = [h for h in pkg_logger.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(ours) == 1
    assert getattr(pkg_logger, _QUEUE_LISTENER_ATTR) is not None

    shutdown_logging()
    assert getattr(pkg_logger, _QUEUE_LISTENER_ATTR) is None
    assert not [h for h in pkg_logger.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_unknown_level_defaults_to_warning() -> None:
    pkg_logger = configure_logging(LoggingConfig(level="chatty"))
    assert pkg_logger.level == logging.WARNING


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "logs" / "permfixer.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    child = get_logger("permfixer.test_rotate")

    for _ in range(10):
        child.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "permfixer.log.1").exists(), "Rotation backup file was not created."


def test_logger_warning_sink(caplog) -> None:
    """TC-04: The sink forwards messages as WARNING records."""
    sink = LoggerWarningSink(get_logger("permfixer.build"))
    assert isinstance(sink, WarningSink)

    with caplog.at_level(logging.WARNING, logger="permfixer.build"):
        sink.warn("Failed to set permissions for /out/bin/tool: denied")

    assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
        ("permfixer.build", logging.WARNING, "Failed to set permissions for /out/bin/tool: denied"),
    ]


def test_logger_warning_sink_default_logger() -> None:
    assert LoggerWarningSink().logger.name == PACKAGE_LOGGER_NAME
