from __future__ import annotations

"""
Unit tests for the Repository.

Verifies:
1. Configuration defaults, overrides and title derivation.
2. Relative path normalization and out-of-bounds detection.
3. Item resolution through the flat cache, including index aliasing.
4. Breadcrumb construction.
"""

import os
from pathlib import Path

import pytest

from servedown.core.nodes import ContentNode, DirectoryNode
from servedown.core.repository import Repository
from servedown.domain.config import RepositoryConfig
from servedown.domain.errors import InvalidPath, NotFound, OutOfBounds


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------
def test_root_must_be_a_directory(mock_content: Path) -> None:
    with pytest.raises(InvalidPath):
        Repository(str(mock_content / "test.md"))


def test_default_config(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_config() == {
        "title": "Mock Content",
        "base_url": "",
        "allow_index": True,
        "hidden_file_prefixes": ["_"],
        "index_name": "index",
        "file_extensions": ["markdown", "md", "textile", "txt"],
        "config_cascade_whitelist": [],
    }


def test_config_overrides_reach_root(mock_content: Path) -> None:
    r = Repository(str(mock_content), config={"file_extensions": ["md"], "theme": "dark"})

    assert r.get("file_extensions") == ["md"]
    assert r.get("theme") == "dark"
    assert r.get_root().get_behavior("file_extensions") == ["md"]


def test_accepts_repository_config_instance(mock_content: Path) -> None:
    cfg = RepositoryConfig.from_mapping({"title": "Docs", "base_url": "/docs"})
    r = Repository(str(mock_content), config=cfg)

    assert r.get("title") == "Docs"
    assert r.get("base_url") == "/docs"


def test_get_and_set_config(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get("allow_index") is True
    r.set("allow_index", False)
    assert r.get("allow_index") is False
    assert r.get_root().get_behavior("allow_index") is False
    assert r.get("foo", "test") == "test"

    r.set("title", "Renamed")
    assert r.get("title") == "Renamed"


def test_default_title_transformer(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    transformer = r.get_title_transformer()

    assert transformer("mock_content") == "Mock Content"


def test_custom_title_transformer(mock_content: Path) -> None:
    r = Repository(str(mock_content), title_transformer=lambda name: name.upper())
    assert r.get("title") == "MOCK_CONTENT"


def test_root_index_title_is_used(mock_content: Path) -> None:
    r = Repository(str(mock_content / "nested"))
    assert r.get("title") == "Example Directory"


# -----------------------------------------------------------------------------
# Relative Paths
# -----------------------------------------------------------------------------
def test_relative_path_of_root_is_empty(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_relative_path(str(mock_content)) == ""
    assert r.get_relative_path(str(mock_content) + "/") == ""
    assert r.get_relative_path("") == ""
    assert r.get_relative_path(".") == ""


def test_relative_path_normalization(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_relative_path("nested/../nested") == "nested"
    assert r.get_relative_path(str(mock_content / "nested" / ".." / "nested")) == "nested"
    assert r.get_relative_path("nested/") == "nested"
    assert r.get_relative_path("./nested/test.md") == "nested/test.md"
    assert r.get_relative_path(str(mock_content / "nested" / "test.md")) == "nested/test.md"


def test_relative_path_outside_root_raises(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    with pytest.raises(OutOfBounds):
        r.get_relative_path("..")
    with pytest.raises(OutOfBounds):
        r.get_relative_path("nested/../../elsewhere")
    with pytest.raises(OutOfBounds):
        r.get_relative_path(str(mock_content.parent))
    with pytest.raises(OutOfBounds):
        r.get_relative_path(str(mock_content) + "_sibling")


def test_relative_path_of_node(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    assert r.get_relative_path(r.get_item("nested/test.md")) == "nested/test.md"


# -----------------------------------------------------------------------------
# Item Resolution
# -----------------------------------------------------------------------------
def test_get_item_for_root(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_item("") is r.get_root()
    assert r.get_item(str(mock_content)) is r.get_root()


def test_get_item_file(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    f = r.get_item("test.md")

    assert isinstance(f, ContentNode)
    assert f.is_directory() is False
    assert f.get_parent() is r.get_root()


def test_get_item_is_cached(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    f = r.get_item("nested/test.md")
    assert r.get_item("nested/test.md") is f
    assert r.get_item(str(mock_content / "nested" / "test.md")) is f
    assert r.get_item("nested/../nested/test.md") is f
    assert r.get_root().get_file("nested").get_file("test.md") is f


def test_get_item_parent_is_nested_directory(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    f = r.get_item("nested/test.md")

    nested = f.get_parent()
    assert isinstance(nested, DirectoryNode)
    assert nested is r.get_item("nested")
    assert nested.get("title") == "Example Directory"


def test_directory_and_index_resolve_to_same_node(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    by_dir = r.get_item("nested")
    by_index = r.get_item("nested/index.md")

    assert by_dir is by_index
    assert by_index.is_directory() is True
    assert by_index.has_index() is True


def test_index_path_resolved_first_still_matches_directory(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    by_index = r.get_item(str(mock_content / "nested" / "index.md"))
    assert by_index is r.get_item("nested/")
    assert isinstance(by_index, DirectoryNode)


def test_get_item_missing_raises_not_found(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    with pytest.raises(NotFound):
        r.get_item("missing.md")
    with pytest.raises(NotFound):
        r.get_item("nested/missing.md")


def test_get_item_outside_root_raises(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    with pytest.raises(OutOfBounds):
        r.get_item("../outside.md")


def test_get_item_hidden_file(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    assert r.get_item("_hidden.md").get_content() == "Hidden content."


def test_get_files_in_directory(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    files = r.get_files_in_directory("nested/")

    assert len(files) == 3
    for f in files:
        assert os.path.exists(f.path)
        if f.is_directory():
            assert os.path.isdir(f.path)

    assert len(r.get_files_in_directory("nested", include_index=True)) == 4


def test_get_files_in_directory_requires_directory(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    with pytest.raises(NotFound):
        r.get_files_in_directory("test.md")


# -----------------------------------------------------------------------------
# Breadcrumbs
# -----------------------------------------------------------------------------
def test_breadcrumbs_for_root(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    assert r.get_breadcrumbs_for_item("") == [{"title": "Mock Content", "url": ""}]


def test_breadcrumbs_for_nested_file(mock_content: Path) -> None:
    r = Repository(str(mock_content))
    item = r.get_item("nested/test.md")

    assert r.get_breadcrumbs_for_item(item) == [
        {"title": "Mock Content", "url": ""},
        {"title": "Example Directory", "url": "nested/"},
        {"title": "Test", "url": "nested/test.md"},
    ]


def test_breadcrumbs_use_file_title(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_breadcrumbs_for_item("test_with_config.md") == [
        {"title": "Mock Content", "url": ""},
        {"title": "Test File", "url": "test_with_config.md"},
    ]


def test_breadcrumbs_with_index_path(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_breadcrumbs_for_item("nested/index.md") == [
        {"title": "Mock Content", "url": ""},
        {"title": "Example Directory", "url": "nested/"},
    ]


def test_breadcrumbs_for_directory_without_index(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    assert r.get_breadcrumbs_for_item("nested/deeper/leaf.md") == [
        {"title": "Mock Content", "url": ""},
        {"title": "Example Directory", "url": "nested/"},
        {"title": "Deeper", "url": "nested/deeper/"},
        {"title": "Leaf", "url": "nested/deeper/leaf.md"},
    ]


def test_breadcrumbs_with_base_url(mock_content: Path) -> None:
    r = Repository(str(mock_content), base_url="http://example.com/docs")

    assert r.get_breadcrumbs_for_item("nested/test.md") == [
        {"title": "Mock Content", "url": "http://example.com/docs/"},
        {"title": "Example Directory", "url": "http://example.com/docs/nested/"},
        {"title": "Test", "url": "http://example.com/docs/nested/test.md"},
    ]


def test_breadcrumbs_outside_root_raise(mock_content: Path) -> None:
    r = Repository(str(mock_content))

    with pytest.raises(OutOfBounds):
        r.get_breadcrumbs_for_item(str(mock_content.parent / "other.md"))


def test_breadcrumbs_with_slash_only_base_url(mock_content: Path) -> None:
    r = Repository(str(mock_content), base_url="/")

    assert r.get_breadcrumbs_for_item("nested/test.md") == [
        {"title": "Mock Content", "url": "/"},
        {"title": "Example Directory", "url": "/nested/"},
        {"title": "Test", "url": "/nested/test.md"},
    ]


def test_breadcrumbs_base_url_trailing_slash_is_not_doubled(mock_content: Path) -> None:
    r = Repository(str(mock_content), base_url="http://example.com/docs/")

    assert r.get_breadcrumbs_for_item("test.md") == [
        {"title": "Mock Content", "url": "http://example.com/docs/"},
        {"title": "Test", "url": "http://example.com/docs/test.md"},
    ]
