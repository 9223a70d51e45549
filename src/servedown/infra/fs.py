from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path canonicalization and root-relative path computation for the
repository. Paths are made absolute and their `.`/`..` segments collapsed
lexically; symbolic links are not resolved.
"""

import os
from typing import List

from servedown.domain.constants import PATH_SEPARATOR
from servedown.domain.errors import OutOfBounds

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def canonicalize(path: str, root: str) -> str:
    """
    Resolve an absolute or root-relative path to its canonical absolute form.

    A single trailing separator is ignored. Relative paths are joined against
    the root before `.` and `..` segments are collapsed.

    Args:
        path: Absolute path, or path relative to `root`.
        root: Absolute root directory.

    Returns:
        str: Canonical absolute path.
    """
    p = path
    if len(p) > 1 and p.endswith((PATH_SEPARATOR, os.sep)):
        p = p[:-1]

    if not os.path.isabs(p):
        p = os.path.join(root, p)
    return os.path.normpath(p)


def is_within(path: str, root: str) -> bool:
    """Check whether a canonical path lies inside (or equals) the root."""
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Mixed drives or mixed absolute/relative paths
        return False


def relative_to_root(path: str, root: str) -> str:
    """
    Compute the root-relative form of a path.

    Args:
        path: Absolute or root-relative path.
        root: Canonical absolute root directory.

    Returns:
        str: Relative path using `/` separators, or "" for the root itself.

    Raises:
        OutOfBounds: If the path resolves outside the root.
    """
    resolved = canonicalize(path, root)
    if resolved == root:
        return ""
    if not is_within(resolved, root):
        raise OutOfBounds(f"Path is outside of the repository root: [{path}]")
    return PATH_SEPARATOR.join(split_components(os.path.relpath(resolved, root)))


def split_components(rel_path: str) -> List[str]:
    """Split a relative path on either separator, dropping empty segments."""
    normalized = rel_path.replace(os.sep, PATH_SEPARATOR)
    return [c for c in normalized.split(PATH_SEPARATOR) if c]
