from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides directory-reference resolution, tree enumeration, entry
classification and permission mutation. Every helper reports failure as a
value (in the manner of ``safe_mkdir``) so callers decide how to react.
"""

import os
import stat
from typing import Any, Iterator, Optional, Tuple

from permfixer.domain.constants import (
    KIND_DIRECTORY,
    KIND_FILE,
    KIND_OTHER,
    KIND_SYMLINK,
    MAX_RESOLUTION_DEPTH,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def resolve_directory(reference: Any) -> Tuple[Optional[str], Optional[str]]:
    """
    Turn an abstract directory reference into an absolute filesystem path.

    Accepted shapes, unwrapped repeatedly:
    - str, bytes or os.PathLike
    - objects exposing ``get()`` (lazy build-tool providers)
    - zero-argument callables

    Args:
        reference: The directory reference to resolve.

    Returns:
        Tuple[Optional[str], Optional[str]]: (Absolute path, Error message).
        Exactly one of the two is set.
    """
    value = reference
    try:
        for _ in range(MAX_RESOLUTION_DEPTH):
            if value is None:
                return None, "directory reference resolved to None"

            if isinstance(value, (str, bytes, os.PathLike)):
                raw = os.fsdecode(os.fspath(value)).strip()
                if not raw:
                    return None, "directory reference is empty"
                return os.path.abspath(os.path.expanduser(raw)), None

            getter = getattr(value, "get", None)
            if callable(getter):
                value = getter()
            elif callable(value):
                value = value()
            else:
                return None, f"unsupported directory reference type: {type(value).__name__}"

        return None, f"directory reference nested deeper than {MAX_RESOLUTION_DEPTH} levels"
    # Provider code is arbitrary; any failure there is a resolution failure
    except Exception as e:
        return None, str(e) or type(e).__name__


# -----------------------------------------------------------------------------
# TRAVERSAL API
# -----------------------------------------------------------------------------

def _raise_walk_error(err: OSError) -> None:
    raise err


def iter_tree(root: str) -> Iterator[str]:
    """
    Yield every entry beneath ``root`` (root excluded), top-down.

    Symlinks to directories are reported but never descended into. Any
    error while listing a directory is raised as ``OSError`` from the
    generator, ending the iteration.

    Args:
        root: Absolute directory path.

    Yields:
        str: Absolute entry paths.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in dirnames:
            yield os.path.join(dirpath, name)
        for name in filenames:
            yield os.path.join(dirpath, name)


def classify_entry(path: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Classify a path without following symlinks.

    Returns:
        Tuple[Optional[str], Optional[str]]: (Entry kind, Error message).
    """
    try:
        st = os.lstat(path)
    except OSError as e:
        return None, str(e)

    if stat.S_ISLNK(st.st_mode):
        return KIND_SYMLINK, None
    if stat.S_ISDIR(st.st_mode):
        return KIND_DIRECTORY, None
    if stat.S_ISREG(st.st_mode):
        return KIND_FILE, None
    return KIND_OTHER, None


# -----------------------------------------------------------------------------
# MUTATION API
# -----------------------------------------------------------------------------

def get_mode(path: str) -> Tuple[Optional[int], Optional[str]]:
    """Read the permission bits of ``path`` without following symlinks."""
    try:
        return stat.S_IMODE(os.lstat(path).st_mode), None
    except OSError as e:
        return None, str(e)


def safe_chmod(path: str, mode: int) -> Tuple[bool, Optional[str]]:
    """
    Attempt to set the permission bits of a file.

    Args:
        path: Target file path.
        mode: Full permission mode to set.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.chmod(path, mode)
        return True, None
    except OSError as e:
        return False, str(e)
