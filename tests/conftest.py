from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A `mock_content` tree shared by node and repository tests.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
TEST_BODY = "# Test #\n\nThis is test content."
NESTED_INDEX_BODY = "# Content #\n\nThis directory has content!"


@pytest.fixture
def mock_content(tmp_path: Path) -> Path:
    """
    Build a small content tree:

        mock_content/
            test.md
            test_with_config.md      (title: Test File)
            _hidden.md
            notes.html
            nested/
                index.md             (title: Example Directory)
                test.md
                other.txt
                deeper/
                    leaf.md
                _drafts/
                    draft.md
    """
    root = tmp_path / "mock_content"
    nested = root / "nested"
    deeper = nested / "deeper"
    drafts = nested / "_drafts"
    for d in (root, nested, deeper, drafts):
        d.mkdir()

    (root / "test.md").write_text(TEST_BODY + "\n", encoding="utf-8")
    (root / "test_with_config.md").write_text(
        "````\ntitle: Test File\ntags: [a, b]\n````\n\n# Test #\n\nThis file has config.\n",
        encoding="utf-8",
    )
    (root / "_hidden.md").write_text("Hidden content.\n", encoding="utf-8")
    (root / "notes.html").write_text("<p>not content</p>\n", encoding="utf-8")

    (nested / "index.md").write_text(
        "````\ntitle: Example Directory\n````\n" + NESTED_INDEX_BODY + "\n",
        encoding="utf-8",
    )
    (nested / "test.md").write_text("# Nested Test #\n", encoding="utf-8")
    (nested / "other.txt").write_text("Plain text.\n", encoding="utf-8")
    (deeper / "leaf.md").write_text("Leaf.\n", encoding="utf-8")
    (drafts / "draft.md").write_text("Draft.\n", encoding="utf-8")

    return root
