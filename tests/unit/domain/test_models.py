from __future__ import annotations

"""
Unit tests for the permission domain models.

Verifies the default profile bits, the add-only mode arithmetic and the
conversion of outcomes into error records.
"""

import stat

from permfixer.domain.constants import STAGE_FILE, STAGE_WALK
from permfixer.domain.models import (
    DEFAULT_PROFILE,
    FileOutcome,
    FixError,
    PermissionProfile,
    WalkOutcome,
)


def test_default_profile_bits() -> None:
    """TC-01: Owner execute, world read, owner and group write."""
    expected = (
        stat.S_IXUSR
        | stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH
        | stat.S_IWUSR | stat.S_IWGRP
    )
    assert DEFAULT_PROFILE.mode == expected == 0o764


def test_apply_to_only_adds_bits() -> None:
    """TC-02: Existing bits survive, missing profile bits are added."""
    assert DEFAULT_PROFILE.apply_to(0o644) == 0o764
    assert DEFAULT_PROFILE.apply_to(0o600) == 0o764
    assert DEFAULT_PROFILE.apply_to(0o000) == 0o764
    # Others-write and group-execute are not part of the profile but are kept
    assert DEFAULT_PROFILE.apply_to(0o617) == 0o777


def test_apply_to_strips_file_type_bits() -> None:
    """TC-02: Only permission bits are returned for a full st_mode."""
    assert DEFAULT_PROFILE.apply_to(stat.S_IFREG | 0o600) == 0o764


def test_apply_to_is_idempotent() -> None:
    once = DEFAULT_PROFILE.apply_to(0o400)
    assert DEFAULT_PROFILE.apply_to(once) == once


def test_custom_profile() -> None:
    profile = PermissionProfile(execute=0o111, read=0o444, write=0o200)
    assert profile.mode == 0o755
    assert profile.apply_to(0o600) == 0o755


def test_file_outcome_error_conversion() -> None:
    """TC-03: Failed outcomes become 'file' stage errors."""
    ok = FileOutcome(path="/d/a", ok=True, old_mode=0o644, new_mode=0o764)
    assert ok.changed is True
    assert ok.to_error() is None

    unchanged = FileOutcome(path="/d/a", ok=True, old_mode=0o764, new_mode=0o764)
    assert unchanged.changed is False

    failed = FileOutcome(path="/d/b", ok=False, error="Permission denied")
    assert failed.changed is False
    assert failed.to_error() == FixError(stage=STAGE_FILE, path="/d/b", error="Permission denied")


def test_walk_outcome_error_conversion() -> None:
    assert WalkOutcome(root="/d").ok is True
    assert WalkOutcome(root="/d").to_error() is None

    broken = WalkOutcome(root="/d", error="boom")
    assert broken.ok is False
    assert broken.to_error() == FixError(stage=STAGE_WALK, path="/d", error="boom")
