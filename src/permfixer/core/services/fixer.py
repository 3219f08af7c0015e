from __future__ import annotations

"""
Permission Fixing Service.

Walks a directory tree and forces a permission profile onto every regular
file found. The run is best-effort and split into three tiers, each
consuming the result of the one below it:

1. ``apply_profile``   - one file, returns a FileOutcome.
2. ``walk_and_fix``    - one tree, reports per-file failures, returns a WalkOutcome.
3. ``fix_permissions`` - resolves the reference and reports walk failures.

Nothing is raised to the caller. Runs are synchronous and assume no other
invocation targets an overlapping tree at the same time; concurrent runs
race at the filesystem level (last chmod wins).
"""

import logging
import os
from typing import Any, Optional

from permfixer.domain.constants import KIND_DIRECTORY, KIND_FILE, STAGE_RESOLVE
from permfixer.domain.models import (
    DEFAULT_PROFILE,
    FileOutcome,
    FixError,
    PermissionProfile,
    WalkOutcome,
)
from permfixer.infra.fs import (
    classify_entry,
    get_mode,
    iter_tree,
    resolve_directory,
    safe_chmod,
)
from permfixer.infra.logging import LoggerWarningSink, WarningSink

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def fix_permissions(
        target_directory: Any,
        log_sink: Optional[WarningSink] = None,
        profile: PermissionProfile = DEFAULT_PROFILE,
) -> None:
    """
    Force ``profile`` onto every regular file beneath a directory.

    A reference that cannot be resolved, or a walk that cannot proceed, is
    reported once through ``log_sink`` and ends the run. A missing target
    is silently ignored. If the reference resolves to a regular file, that
    file alone is fixed.

    Args:
        target_directory: Path, PathLike, lazy provider (``get()``) or callable.
        log_sink: Receiver of warning messages. Defaults to the package logger.
        profile: Permission bits to add to each regular file.
    """
    sink = log_sink if log_sink is not None else LoggerWarningSink()

    root, resolve_err = resolve_directory(target_directory)
    if root is None:
        resolve_error = FixError(stage=STAGE_RESOLVE, path="", error=resolve_err or "")
        _report(sink, f"Failed to resolve directory: {resolve_error.error}")
        return

    if not os.path.exists(root):
        logger.debug(f"Skipping missing directory '{root}'")
        return

    outcome = walk_and_fix(root, profile, sink)
    walk_error = outcome.to_error()
    if walk_error is not None:
        _report(sink, f"Failed to walk directory {walk_error.path}: {walk_error.error}")

    logger.debug(
        f"Fixed permissions under '{root}': {outcome.files_seen} files, "
        f"{outcome.files_changed} changed, {outcome.files_failed} failed, "
        f"{outcome.skipped} skipped"
    )


def walk_and_fix(root: str, profile: PermissionProfile, log_sink: WarningSink) -> WalkOutcome:
    """
    Apply ``profile`` to every regular file reachable from ``root``.

    Per-file failures are reported through ``log_sink`` and counted; the
    walk continues. A traversal failure stops the walk and is returned in
    the outcome for the caller to report.

    Args:
        root: Absolute path of the tree (or single file) to fix.
        profile: Permission bits to add.
        log_sink: Receiver of per-file warnings.

    Returns:
        WalkOutcome: Counters plus the traversal error, if any.
    """
    seen = changed = failed = skipped = 0

    if os.path.isdir(root):
        entries = iter_tree(root)
    else:
        root_kind, root_err = classify_entry(root)
        if root_kind is None:
            return WalkOutcome(root=root, error=root_err)
        if root_kind != KIND_FILE:
            return WalkOutcome(root=root, skipped=1)
        entries = iter([root])

    try:
        for path in entries:
            kind, kind_err = classify_entry(path)

            if kind is None:
                # Entry vanished or became unreadable between listing and stat
                result = FileOutcome(path=path, ok=False, error=kind_err)
            elif kind == KIND_DIRECTORY:
                continue
            elif kind != KIND_FILE:
                skipped += 1
                continue
            else:
                result = apply_profile(path, profile)

            seen += 1
            file_error = result.to_error()
            if file_error is not None:
                failed += 1
                _report(log_sink, f"Failed to set permissions for {file_error.path}: {file_error.error}")
            elif result.changed:
                changed += 1
    # Deep trees can exhaust the recursion limit inside os.walk
    except Exception as e:
        return WalkOutcome(
            root=root,
            files_seen=seen,
            files_changed=changed,
            files_failed=failed,
            skipped=skipped,
            error=_describe(e),
        )

    return WalkOutcome(
        root=root,
        files_seen=seen,
        files_changed=changed,
        files_failed=failed,
        skipped=skipped,
    )


def apply_profile(path: str, profile: PermissionProfile) -> FileOutcome:
    """
    Add the profile bits to a single regular file.

    The chmod is issued even when the bits are already present; existing
    bits are never cleared, so repeated runs converge on the same mode.

    Args:
        path: Absolute path of a regular file.
        profile: Permission bits to add.

    Returns:
        FileOutcome: Old and new modes, or the error message on failure.
    """
    try:
        old_mode, err = get_mode(path)
        if old_mode is None:
            return FileOutcome(path=path, ok=False, error=err)

        new_mode = profile.apply_to(old_mode)
        ok, err = safe_chmod(path, new_mode)
    except Exception as e:
        return FileOutcome(path=path, ok=False, error=_describe(e))

    if not ok:
        return FileOutcome(path=path, ok=False, old_mode=old_mode, error=err)

    return FileOutcome(path=path, ok=True, old_mode=old_mode, new_mode=new_mode)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _report(sink: WarningSink, message: str) -> None:
    """Deliver a warning; a failing sink must not break the never-raise contract."""
    try:
        sink.warn(message)
    except Exception as e:
        logger.debug(f"Warning sink {sink!r} failed: {e}")


def _describe(err: BaseException) -> str:
    return str(err) or type(err).__name__
