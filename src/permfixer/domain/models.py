from __future__ import annotations

"""
Permission Domain Data Models.

Defines the immutable permission profile and the result records passed
between the tiers of a fix run. Failures travel as values, never as
exceptions, so a per-file problem cannot unwind past the walk loop.
"""

import stat
from dataclasses import dataclass
from typing import Optional

from permfixer.domain.constants import (
    DEFAULT_EXECUTE_BITS,
    DEFAULT_READ_BITS,
    DEFAULT_WRITE_BITS,
    STAGE_FILE,
    STAGE_WALK,
)

# -----------------------------------------------------------------------------
# PROFILE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PermissionProfile:
    """
    Set of permission bits forced onto every regular file.

    Bits are only ever added; a profile never clears bits already present
    on a file.

    Attributes:
        execute: Execute bits to add (default: owner).
        read: Read bits to add (default: owner, group and others).
        write: Write bits to add (default: owner and group).
    """
    execute: int = DEFAULT_EXECUTE_BITS
    read: int = DEFAULT_READ_BITS
    write: int = DEFAULT_WRITE_BITS

    @property
    def mode(self) -> int:
        """Union of all bits carried by the profile."""
        return self.execute | self.read | self.write

    def apply_to(self, mode: int) -> int:
        """Return the permission part of ``mode`` with the profile bits added."""
        return stat.S_IMODE(mode) | self.mode


DEFAULT_PROFILE = PermissionProfile()

# -----------------------------------------------------------------------------
# ERROR TRACKING MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FixError:
    """
    Encapsulates a non-fatal failure raised during a fix run.

    Attributes:
        stage: Failure stage identifier (resolve, walk or file).
        path: Path involved, or an empty string if it could not be resolved.
        error: Descriptive error message.
    """
    stage: str
    path: str
    error: str

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileOutcome:
    """Result of applying a profile to a single regular file."""
    path: str
    ok: bool
    old_mode: Optional[int] = None
    new_mode: Optional[int] = None
    error: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.ok and self.old_mode != self.new_mode

    def to_error(self) -> Optional[FixError]:
        if self.ok:
            return None
        return FixError(stage=STAGE_FILE, path=self.path, error=self.error or "")


@dataclass(frozen=True)
class WalkOutcome:
    """
    Aggregate result of walking one tree.

    Attributes:
        root: Absolute path that was walked.
        files_seen: Regular files encountered.
        files_changed: Files whose mode was actually modified.
        files_failed: Files whose permissions could not be set.
        skipped: Non-regular entries (directories excluded) left untouched.
        error: Traversal error that stopped the walk, if any.
    """
    root: str
    files_seen: int = 0
    files_changed: int = 0
    files_failed: int = 0
    skipped: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_error(self) -> Optional[FixError]:
        if self.error is None:
            return None
        return FixError(stage=STAGE_WALK, path=self.root, error=self.error)
