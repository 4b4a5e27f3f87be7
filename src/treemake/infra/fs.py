from __future__ import annotations

"""
Filesystem Helpers.

Path canonicalization, sorted directory listing and directory creation.
Listings are sorted so that population, and therefore the generated
Makefiles, do not depend on the platform's readdir order.
"""

import os
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# PATHS
# -----------------------------------------------------------------------------

def canonical_path(path: str) -> str:
    """Absolute form of a path with symlinks and '..' resolved."""
    return os.path.realpath(os.path.abspath(path))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Turn a user-supplied path into an absolute one.

    '~' and environment variables are expanded. A missing or blank value
    selects the fallback.

    Args:
        path: Path as typed by the user, or None.
        fallback: Path used when none was given.

    Returns:
        str: Absolute path, not resolved against symlinks.
    """
    raw = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(raw)))


# -----------------------------------------------------------------------------
# LISTING
# -----------------------------------------------------------------------------

def list_directory(path: str) -> Tuple[List[str], List[str]]:
    """
    Split the direct entries of a directory into subdirectories and files.

    Symbolic links to directories are left out of both lists.

    Args:
        path: Directory to inspect.

    Returns:
        Tuple[List[str], List[str]]: (Sorted subdirectory names, sorted file names).

    Raises:
        OSError: If the directory cannot be read.
    """
    subdirs: List[str] = []
    file_names: List[str] = []

    with os.scandir(path) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.name)
            elif entry.is_file():
                file_names.append(entry.name)

    return sorted(subdirs), sorted(file_names)


# -----------------------------------------------------------------------------
# CREATION
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create a directory and any missing parents.

    Returns:
        Tuple[bool, Optional[str]]: (True, None) on success, otherwise
        (False, reason).
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return False, str(e)
    return True, None
