from __future__ import annotations

"""
Content File Node.

Represents a single content file: a plain text body with an optional YAML
metadata header fenced by a line of four backticks. The file is read and
parsed once, on first access to its body, raw text or metadata.
"""

import logging
import os
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from servedown.core.services.metadata import parse_metadata
from servedown.domain.constants import FILE_ENCODING, METADATA_FENCE
from servedown.domain.errors import InvalidPath

if TYPE_CHECKING:
    from servedown.core.nodes.directory import DirectoryNode

logger = logging.getLogger(__name__)


class ContentNode:
    """
    A lazily loaded content file.

    The index flag and the parent reference are assigned by the owning
    DirectoryNode; the node never determines them itself.
    """

    def __init__(self, path: str) -> None:
        """
        Args:
            path: Path to an existing regular file.

        Raises:
            InvalidPath: If the path is a directory or not an existing file.
        """
        if os.path.isdir(path):
            raise InvalidPath(f"Content node path is a directory: [{path}]")
        if not os.path.isfile(path):
            raise InvalidPath(f"File not found: [{path}]")

        self._path = os.path.abspath(path)
        self._raw: Optional[str] = None
        self._content: Optional[str] = None
        self._config: Dict[str, Any] = {}
        self._loaded = False
        self._is_index = False
        self._parent: Optional[weakref.ref] = None
        self._breadcrumb: Dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"ContentNode({self._path!r})"

    def __str__(self) -> str:
        return self.get_content() or ""

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------
    @property
    def path(self) -> str:
        return self._path

    def get_path(self) -> str:
        return self._path

    def is_directory(self) -> bool:
        return False

    def is_index(self) -> bool:
        return self._is_index

    def _set_is_index(self, is_index: bool) -> None:
        self._is_index = bool(is_index)

    # -------------------------------------------------------------------------
    # Parent Reference
    # -------------------------------------------------------------------------
    def get_parent(self) -> Optional["DirectoryNode"]:
        """Return the owning directory, or None if unbound or collected."""
        return self._parent() if self._parent is not None else None

    def has_parent(self) -> bool:
        return self.get_parent() is not None

    def _set_parent(self, parent: "DirectoryNode") -> None:
        self._parent = weakref.ref(parent)

    # -------------------------------------------------------------------------
    # Metadata Access
    # -------------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        """Return the metadata mapping, loading the file if needed."""
        self._load()
        return self._config

    def set_config(self, config: Mapping[str, Any]) -> None:
        """Replace the whole metadata mapping (in memory only)."""
        self._load()
        self._config = dict(config)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a metadata value, or `default` when the key is absent."""
        self._load()
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()
        self._config[key] = value

    def remove(self, key: str) -> None:
        self._load()
        self._config.pop(key, None)

    # -------------------------------------------------------------------------
    # Breadcrumb Data
    # -------------------------------------------------------------------------
    def get_breadcrumb_data(self) -> Dict[str, Any]:
        """Return the caller-attached breadcrumb entry (empty by default)."""
        return self._breadcrumb

    def set_breadcrumb_data(self, data: Mapping[str, Any]) -> None:
        self._breadcrumb = dict(data)

    # -------------------------------------------------------------------------
    # Content Access
    # -------------------------------------------------------------------------
    def get_content(self) -> Optional[str]:
        """Return the trimmed body, or None when the file has no body text."""
        self._load()
        return self._content

    def get_raw(self) -> str:
        """Return the full file text, header included."""
        self._load()
        return self._raw or ""

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    def _load(self) -> None:
        """
        Split the file into header and body and parse the header.

        A fence line toggles header mode and is discarded. An unterminated
        header absorbs the rest of the file, leaving the body empty.
        """
        if self._loaded:
            return

        with open(self._path, "r", encoding=FILE_ENCODING, newline="") as f:
            lines = f.readlines()

        in_header = False
        header: List[str] = []
        body: List[str] = []
        for line in lines:
            if line.rstrip("\r\n") == METADATA_FENCE:
                in_header = not in_header
                continue

            if in_header:
                header.append(line)
            else:
                body.append(line)

        header_text = "".join(header)
        config = parse_metadata(header_text) if header else {}

        # State is committed only once the header has parsed
        self._raw = "".join(lines)
        self._content = "".join(body).strip() or None
        self._config = config
        self._loaded = True

        logger.debug(
            f"Loaded {self._path} (header lines={len(header)}, body lines={len(body)})"
        )
