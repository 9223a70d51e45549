from __future__ import annotations

"""
Directory Listing Data Models.

Defines the DTO produced by the file lister for every entry that survives
the extension and hidden-prefix filters.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryEntry:
    """
    Represents one listed filesystem entry.

    Attributes:
        path: Absolute filesystem path.
        rel_path: Path relative to the listed directory.
        name: Base name of the entry.
        is_dir: True when the entry is a directory.
    """
    path: str
    rel_path: str
    name: str
    is_dir: bool
