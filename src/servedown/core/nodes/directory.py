from __future__ import annotations

"""
Directory Node.

Exposes a content directory as a resolvable node. A directory may carry its
own content and metadata through an index file (e.g. `index.md`), and acts as
a caching factory for its children: each child is built once, on first
request, and reused for every later lookup or enumeration.

Whitelisted metadata keys cascade to descendants. Writing such a key on a
directory pushes it to every child already in the cache, and every child
resolved later copies the directory's current value when it is first built.
"""

import logging
import os
import weakref
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from servedown.core.components.filters import index_candidates, is_index_filename
from servedown.core.nodes.content import ContentNode
from servedown.core.services.scanner import list_directory
from servedown.domain.config import Behaviors, BehaviorsLike, resolve_behaviors
from servedown.domain.errors import InvalidIndex

logger = logging.getLogger(__name__)

Node = Union[ContentNode, "DirectoryNode"]


class DirectoryNode:
    """
    A directory with an optional index file and a lazily populated child cache.

    Metadata and content reads and writes are delegated to the bound index
    node when there is one; otherwise the directory keeps its own metadata
    map and has no content.
    """

    def __init__(self, path: str, behaviors: BehaviorsLike = None) -> None:
        """
        Args:
            path: A directory, or an index file inside the directory.
            behaviors: Overrides merged over the default behaviors.

        Raises:
            InvalidIndex: If the path is neither a directory nor an existing
                index file.
            TypeError: If the behaviors are malformed.
        """
        self._behaviors: Behaviors = resolve_behaviors(behaviors)
        self._index: Optional[ContentNode] = None
        self._config: Dict[str, Any] = {}
        self._children: Dict[str, Node] = {}
        self._listing: Optional[List[Node]] = None
        self._parent: Optional[weakref.ref] = None
        self._breadcrumb: Dict[str, Any] = {}

        abs_path = os.path.abspath(path)
        if os.path.isdir(abs_path):
            self._path = abs_path
            if self._behaviors.allow_index:
                index = self._probe_index()
                if index is not None:
                    self._bind_index(index)
            return

        if not self._behaviors.allow_index:
            raise InvalidIndex(f"Directory indexes are disabled: [{path}]")

        file_name = os.path.basename(abs_path)
        if not is_index_filename(
                file_name, self._behaviors.index_name, self._behaviors.file_extensions
        ):
            raise InvalidIndex(f"Not a valid directory index file: [{path}]")
        if not os.path.isfile(abs_path):
            raise InvalidIndex(f"Index file not found: [{path}]")

        self._path = os.path.dirname(abs_path)
        self._bind_index(ContentNode(abs_path))

    def __repr__(self) -> str:
        return f"DirectoryNode({self._path!r})"

    def __str__(self) -> str:
        return self.get_content() or ""

    def __iter__(self) -> Iterator[Node]:
        return iter(self.get_files())

    def __len__(self) -> int:
        return len(self.get_files())

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------
    @property
    def path(self) -> str:
        return self._path

    def get_path(self) -> str:
        return self._path

    def is_directory(self) -> bool:
        return True

    def is_index(self) -> bool:
        return False

    def get_parent(self) -> Optional["DirectoryNode"]:
        """Return the containing directory, or None for a standalone node."""
        return self._parent() if self._parent is not None else None

    def has_parent(self) -> bool:
        return self.get_parent() is not None

    def _set_parent(self, parent: "DirectoryNode") -> None:
        self._parent = weakref.ref(parent)

    def get_breadcrumb_data(self) -> Dict[str, Any]:
        return self._breadcrumb

    def set_breadcrumb_data(self, data: Mapping[str, Any]) -> None:
        """Attach a breadcrumb entry to the directory itself, not its index."""
        self._breadcrumb = dict(data)

    # -------------------------------------------------------------------------
    # Behaviors
    # -------------------------------------------------------------------------
    @property
    def behaviors(self) -> Behaviors:
        return self._behaviors

    def get_behaviors(self) -> Dict[str, Any]:
        return self._behaviors.to_dict()

    def get_behavior(self, key: str, default: Any = None) -> Any:
        return self._behaviors.to_dict().get(key, default)

    def set_behavior(self, key: str, value: Any) -> None:
        """
        Change a single behavior.

        The index binding is decided at construction and is not revisited.
        Children resolved afterwards inherit the new value.
        """
        self._behaviors = self._behaviors.replace(**{key: value})

    # -------------------------------------------------------------------------
    # Index File
    # -------------------------------------------------------------------------
    def has_index(self) -> bool:
        return self._index is not None

    def get_index_file(self) -> Optional[ContentNode]:
        return self._index

    def _probe_index(self) -> Optional[ContentNode]:
        """Return the first existing `<index_name>.<ext>` in extension order."""
        for candidate in index_candidates(
                self._behaviors.index_name, self._behaviors.file_extensions
        ):
            candidate_path = os.path.join(self._path, candidate)
            if os.path.isfile(candidate_path):
                logger.debug(f"Bound index file {candidate_path}")
                return ContentNode(candidate_path)
        return None

    def _bind_index(self, index: ContentNode) -> None:
        index._set_is_index(True)
        index._set_parent(self)
        self._index = index

    # -------------------------------------------------------------------------
    # Metadata and Content
    # -------------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        if self._index is not None:
            return self._index.get_config()
        return self._config

    def set_config(self, config: Mapping[str, Any]) -> None:
        """Replace the whole metadata mapping; nothing is cascaded."""
        if self._index is not None:
            self._index.set_config(config)
        else:
            self._config = dict(config)

    def get(self, key: str, default: Any = None) -> Any:
        return self.get_config().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a metadata value and cascade it when the key is whitelisted.

        The push reaches only children that are already cached; each of them
        forwards it to its own cached children.
        """
        if self._index is not None:
            self._index.set(key, value)
        else:
            self._config[key] = value

        if key not in self._behaviors.config_cascade_whitelist:
            return

        for child in list(self._children.values()):
            child.set(key, value)

    def remove(self, key: str) -> None:
        """Remove a metadata value locally. Removals are never cascaded."""
        if self._index is not None:
            self._index.remove(key)
        else:
            self._config.pop(key, None)

    def get_content(self) -> Optional[str]:
        if self._index is not None:
            return self._index.get_content()
        return None

    # -------------------------------------------------------------------------
    # Child Resolution
    # -------------------------------------------------------------------------
    def get_file(self, name: str) -> Optional[Node]:
        """
        Resolve a direct child by name.

        The bound index file is returned directly. Other children are built on
        first request and cached; a missing child yields None.

        Args:
            name: Base name of the child; trailing separators are ignored.

        Returns:
            Optional[Node]: The child node, or None if it does not exist.
        """
        name = name.rstrip("/" + os.sep)

        if self._index is not None and name == os.path.basename(self._index.path):
            return self._index

        if name in self._children:
            return self._children[name]

        return self._load_child(name)

    def has_file(self, name: str) -> bool:
        return self.get_file(name) is not None

    def get_files(self, include_index: bool = False) -> List[Node]:
        """
        Return every visible child, enumerating the directory on first call.

        Hidden entries and files with unknown extensions are left out of the
        listing but remain resolvable through `get_file`.

        Args:
            include_index: Append the bound index node to the result.

        Returns:
            List[Node]: Children in listing order.
        """
        if self._listing is None:
            self._listing = self._enumerate()

        files = list(self._listing)
        if include_index and self._index is not None:
            files.append(self._index)
        return files

    def _enumerate(self) -> List[Node]:
        excluded = [os.path.basename(self._index.path)] if self._index is not None else []
        entries = list_directory(
            self._path,
            extensions=self._behaviors.file_extensions,
            hidden_prefixes=self._behaviors.hidden_file_prefixes,
            recursive=False,
            exclude_file_names=excluded,
        )

        nodes: List[Node] = []
        for entry in entries:
            node = self.get_file(entry.name)
            if node is not None:
                nodes.append(node)
        return nodes

    def _load_child(self, name: str) -> Optional[Node]:
        if not name or name in (os.curdir, os.pardir) or "/" in name or os.sep in name:
            return None

        child_path = os.path.join(self._path, name)
        if not os.path.exists(child_path):
            logger.debug(f"No child named '{name}' in {self._path}")
            return None

        child = self._create_child(name, child_path)
        self._cascade_into(child)
        child._set_parent(self)
        self._children[name] = child
        return child

    def _create_child(self, name: str, child_path: str) -> Node:
        """Directories and index-named files become DirectoryNodes."""
        if os.path.isdir(child_path):
            return DirectoryNode(child_path, self._behaviors)

        if self._behaviors.allow_index and is_index_filename(
                name, self._behaviors.index_name, self._behaviors.file_extensions
        ):
            return DirectoryNode(child_path, self._behaviors)

        return ContentNode(child_path)

    def _cascade_into(self, child: Node) -> None:
        """Copy whitelisted values this directory holds onto a new child."""
        whitelist = self._behaviors.config_cascade_whitelist
        if not whitelist:
            return

        config = self.get_config()
        for key in whitelist:
            if key in config:
                child.set(key, config[key])
