from __future__ import annotations

"""
Directory Listing Service.

Lists the entries of a content directory, applying the extension allow-list
to files, the hidden-prefix deny-list to every entry and an explicit name
exclusion to files only. Directories are never filtered by extension.
"""

import logging
import os
from typing import Iterable, Iterator, List, Sequence

from servedown.core.components.filters import (
    compile_patterns,
    exact_name_patterns,
    extension_patterns,
    matches_any,
    matches_include,
    prefix_patterns,
)
from servedown.domain.listing_models import DirectoryEntry

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def yield_directory_entries(
        dir_path: str,
        extensions: Sequence[str],
        hidden_prefixes: Sequence[str],
        recursive: bool = False,
        exclude_file_names: Iterable[str] = (),
) -> Iterator[DirectoryEntry]:
    """
    Walk a directory and yield the entries that survive the filters.

    Within each visited directory, subdirectories are yielded before files and
    both groups are sorted by name. Hidden subdirectories are pruned from the
    walk when recursing.

    Args:
        dir_path: Directory to list.
        extensions: Allowed file extensions, without the leading dot.
        hidden_prefixes: Name prefixes excluded for files and directories.
        recursive: Descend into subdirectories when True.
        exclude_file_names: File names excluded explicitly (never directories).

    Yields:
        DirectoryEntry: One item per accepted entry.
    """
    base = os.path.abspath(dir_path)
    hidden_rx = compile_patterns(prefix_patterns(hidden_prefixes))
    include_rx = compile_patterns(extension_patterns(extensions))
    excluded_rx = compile_patterns(exact_name_patterns(exclude_file_names))

    for root, dirs, files in os.walk(base):
        # In-place pruning keeps os.walk out of hidden directories
        dirs[:] = [d for d in dirs if not matches_any(d, hidden_rx)]
        dirs.sort()
        files.sort()

        for dir_name in dirs:
            full = os.path.join(root, dir_name)
            yield DirectoryEntry(
                path=full,
                rel_path=os.path.relpath(full, base),
                name=dir_name,
                is_dir=True,
            )

        for file_name in files:
            if matches_any(file_name, hidden_rx):
                continue
            if not matches_include(file_name, include_rx):
                continue
            if matches_any(file_name, excluded_rx):
                continue

            full = os.path.join(root, file_name)
            yield DirectoryEntry(
                path=full,
                rel_path=os.path.relpath(full, base),
                name=file_name,
                is_dir=False,
            )

        if not recursive:
            break


def list_directory(
        dir_path: str,
        extensions: Sequence[str],
        hidden_prefixes: Sequence[str],
        recursive: bool = False,
        exclude_file_names: Iterable[str] = (),
) -> List[DirectoryEntry]:
    """
    Materialize the filtered listing of a directory.

    Returns:
        List[DirectoryEntry]: Ordered entries, see `yield_directory_entries`.
    """
    entries = list(yield_directory_entries(
        dir_path,
        extensions=extensions,
        hidden_prefixes=hidden_prefixes,
        recursive=recursive,
        exclude_file_names=exclude_file_names,
    ))
    logger.debug(f"Listed {len(entries)} entries in {dir_path} (recursive={recursive})")
    return entries
