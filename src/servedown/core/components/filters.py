from __future__ import annotations

"""
Entry Filtering Engine.

Translates the directory behaviors (allowed extensions, hidden prefixes and
excluded names) into compiled regex patterns and provides the matching
helpers used by the file lister and the index detection logic.
"""

import os
import re
from typing import Iterable, List, Sequence

# -----------------------------------------------------------------------------
# PATTERN BUILDERS
# -----------------------------------------------------------------------------

def prefix_patterns(prefixes: Iterable[str]) -> List[str]:
    """
    Build regexes matching names that start with any of the given prefixes.

    Args:
        prefixes: Literal name prefixes (e.g. "_").

    Returns:
        List[str]: Anchored regex strings.
    """
    return [rf"^{re.escape(p)}" for p in prefixes if p]


def extension_patterns(extensions: Iterable[str]) -> List[str]:
    """
    Build regexes matching names ending in one of the given extensions.

    Args:
        extensions: Extensions without the leading dot.

    Returns:
        List[str]: Anchored regex strings.
    """
    return [rf"\.{re.escape(ext)}$" for ext in extensions if ext]


def exact_name_patterns(names: Iterable[str]) -> List[str]:
    """Build regexes matching exactly the given names."""
    return [rf"^{re.escape(n)}$" for n in names if n]

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed patterns are discarded.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a string matches at least one compiled regex pattern.

    Args:
        name: Filename or directory name to evaluate.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(name) for rx in compiled_patterns)


def matches_include(name: str, include_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a string satisfies the inclusion whitelist.

    Returns:
        bool: True if matched, False if the list is empty or no match occurs.
    """
    if not include_patterns:
        return False
    return any(rx.search(name) for rx in include_patterns)

# -----------------------------------------------------------------------------
# INDEX FILE CLASSIFICATION
# -----------------------------------------------------------------------------

def is_index_filename(file_name: str, index_name: str, extensions: Sequence[str]) -> bool:
    """
    Check whether a base name follows the `<index_name>.<ext>` pattern.

    Args:
        file_name: Base name to evaluate.
        index_name: Expected stem of the index file.
        extensions: Allowed extensions without the leading dot.

    Returns:
        bool: True if the stem matches and the extension is allowed.
    """
    stem, ext = os.path.splitext(file_name)
    return stem == index_name and bool(ext) and ext[1:] in extensions


def index_candidates(index_name: str, extensions: Sequence[str]) -> List[str]:
    """List candidate index file names in probing order."""
    return [f"{index_name}.{ext}" for ext in extensions]
