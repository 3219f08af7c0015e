from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the package logger. Records are
routed through a QueueHandler/QueueListener pair so that writing the log
file never blocks the build thread running a fix.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from permfixer.infra.logging.config import (
    _LEVEL_MAP,
    PACKAGE_LOGGER_NAME,
    LoggingConfig,
)
from permfixer.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_permfixer_configured"
_QUEUE_LISTENER_ATTR: str = "_permfixer_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the package logger once, using non-blocking I/O.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    previously installed handlers and listener are torn down first.

    Args:
        cfg: Structural configuration for the logging system.
        force: If True, bypass idempotency checks and re-initialize handlers.

    Returns:
        logging.Logger: The configured package logger.
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    if getattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False) and not force:
        return pkg_logger

    try:
        level_int = _parse_level(cfg.level)
        pkg_logger.setLevel(level_int)
        pkg_logger.propagate = cfg.propagate

        _remove_our_handlers(pkg_logger)
        _stop_existing_listener(pkg_logger)

        handlers_list: List[logging.Handler] = []

        if cfg.console:
            sh = logging.StreamHandler(sys.stderr)
            sh.setLevel(level_int)
            sh.setFormatter(logging.Formatter(cfg.console_fmt))
            _tag_handler(sh)
            handlers_list.append(sh)

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                handlers_list.append(fh)

        if not handlers_list:
            return pkg_logger

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        pkg_logger.addHandler(queue_handler)

        setattr(pkg_logger, _QUEUE_LISTENER_ATTR, listener)
        setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, True)

        # Flush pending records on interpreter shutdown
        atexit.register(_safe_stop_listener, listener)

        return pkg_logger

    # Fall back to a plain console handler if the queue setup fails
    except Exception:
        _remove_our_handlers(pkg_logger)
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(sh)
        pkg_logger.addHandler(sh)
        pkg_logger.warning("Logging setup failed. Switched to plain console output.")
        return pkg_logger


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance compliant with the package configuration.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Stop the listener and detach every handler installed by this package."""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    _stop_existing_listener(pkg_logger)
    _remove_our_handlers(pkg_logger)
    if hasattr(pkg_logger, _CONFIGURED_FLAG_ATTR):
        delattr(pkg_logger, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    """Detach and close all handlers installed by this package."""
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()


def _stop_existing_listener(target: logging.Logger) -> None:
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    ``QueueListener.stop`` fails on a listener whose thread is already
    gone, which happens when both a test reset and atexit stop it.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()
        for h in listener.handlers:
            h.close()
