from __future__ import annotations

"""
Unit tests for the path helpers of the FileSystem Infrastructure Layer.
"""

import os
from pathlib import Path

import pytest

from servedown.domain.errors import OutOfBounds
from servedown.infra.fs import (
    canonicalize,
    is_within,
    relative_to_root,
    split_components,
)

ROOT = os.path.abspath(os.sep + os.path.join("srv", "content"))


def test_canonicalize_joins_relative_paths_against_root() -> None:
    assert canonicalize("a/b", ROOT) == os.path.join(ROOT, "a", "b")
    assert canonicalize("a/./b/../c/", ROOT) == os.path.join(ROOT, "a", "c")
    assert canonicalize("", ROOT) == ROOT


def test_is_within() -> None:
    assert is_within(ROOT, ROOT) is True
    assert is_within(os.path.join(ROOT, "a"), ROOT) is True
    assert is_within(ROOT + "_other", ROOT) is False
    assert is_within(os.path.dirname(ROOT), ROOT) is False


def test_relative_to_root() -> None:
    assert relative_to_root(ROOT, ROOT) == ""
    assert relative_to_root("a/../a", ROOT) == "a"
    assert relative_to_root(os.path.join(ROOT, "a", "b.md"), ROOT) == "a/b.md"

    with pytest.raises(OutOfBounds):
        relative_to_root("../x", ROOT)


def test_split_components_drops_empty_segments() -> None:
    assert split_components("a//b/") == ["a", "b"]
    assert split_components("") == []
