from __future__ import annotations

"""
permfixer: best-effort permission normalization for build artifacts.
"""

from permfixer.core.services.fixer import apply_profile, fix_permissions, walk_and_fix
from permfixer.domain.models import (
    DEFAULT_PROFILE,
    FileOutcome,
    FixError,
    PermissionProfile,
    WalkOutcome,
)
from permfixer.infra.logging import (
    LoggerWarningSink,
    LoggingConfig,
    WarningSink,
    configure_logging,
    get_logger,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PROFILE",
    "FileOutcome",
    "FixError",
    "LoggerWarningSink",
    "LoggingConfig",
    "PermissionProfile",
    "WalkOutcome",
    "WarningSink",
    "apply_profile",
    "configure_logging",
    "fix_permissions",
    "get_logger",
    "walk_and_fix",
]
