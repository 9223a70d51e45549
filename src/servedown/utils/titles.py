from __future__ import annotations

"""
Default title generation for nodes without an explicit `title` value.
"""

import os
from typing import Callable

TitleTransformer = Callable[[str], str]


def default_title(path: str) -> str:
    """
    Build a human readable title from the last component of a path.

    Drops the extension when there is one, splits the remainder on
    underscores and capitalizes each word: "mock_content" -> "Mock Content".

    Args:
        path: File name or path; trailing separators are ignored.

    Returns:
        str: The derived title.
    """
    name = os.path.basename(path.rstrip("/\\")) or path
    parts = name.split(".")
    if len(parts) > 1:
        parts.pop()
    words = "_".join(parts).split("_")
    return " ".join(w.capitalize() for w in words if w)
