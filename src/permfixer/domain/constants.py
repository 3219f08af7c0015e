from __future__ import annotations

"""
Domain Constants.

Default permission bits forced onto regular files and the identifiers of
the stages at which a fix run can fail.
"""

import stat

# -----------------------------------------------------------------------------
# DEFAULT PERMISSION PROFILE
# -----------------------------------------------------------------------------

DEFAULT_EXECUTE_BITS: int = stat.S_IXUSR
DEFAULT_READ_BITS: int = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH
DEFAULT_WRITE_BITS: int = stat.S_IWUSR | stat.S_IWGRP

# Lazy references (providers of providers) are unwrapped at most this deep
MAX_RESOLUTION_DEPTH: int = 8

# -----------------------------------------------------------------------------
# FAILURE STAGES
# -----------------------------------------------------------------------------

STAGE_RESOLVE = "resolve"
STAGE_WALK = "walk"
STAGE_FILE = "file"

# -----------------------------------------------------------------------------
# ENTRY KINDS
# -----------------------------------------------------------------------------

KIND_FILE = "file"
KIND_DIRECTORY = "directory"
KIND_SYMLINK = "symlink"
KIND_OTHER = "other"
