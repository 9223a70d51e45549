from __future__ import annotations

"""
Content Repository.

Root entry point for a content directory. Normalizes external path strings
to root-relative form, resolves them component by component through the
directory nodes, and keeps a flat cache keyed by relative path so that
repeated lookups return the same node instance. Also builds breadcrumb
trails from the root to any resolved item.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from servedown.core.nodes import ContentNode, DirectoryNode, Node
from servedown.domain.config import RepositoryConfig
from servedown.domain.constants import BEHAVIOR_KEYS, PATH_SEPARATOR
from servedown.domain.errors import InvalidPath, NotFound
from servedown.infra.fs import relative_to_root, split_components
from servedown.utils.titles import TitleTransformer, default_title

logger = logging.getLogger(__name__)

Breadcrumb = Dict[str, str]


class Repository:
    """
    Resolves paths inside a content root into cached nodes.

    Caches only grow: a path resolved once keeps returning the same instance
    for the lifetime of the repository.
    """

    def __init__(
            self,
            root: str,
            base_url: str = "",
            config: Union[RepositoryConfig, Mapping[str, Any], None] = None,
            title_transformer: Optional[TitleTransformer] = None,
    ) -> None:
        """
        Args:
            root: Path to the content root directory.
            base_url: Prefix for breadcrumb URLs. Overrides `config` when set.
            config: Repository settings; behavior keys apply to the root.
            title_transformer: Callable deriving titles from path names.

        Raises:
            InvalidPath: If the root is not a directory.
        """
        if not root or not os.path.isdir(root):
            raise InvalidPath(f"Repository root must be a directory: [{root}]")

        if isinstance(config, RepositoryConfig):
            self._config = config
        else:
            self._config = RepositoryConfig.from_mapping(config)
        if base_url:
            self._config = self._config.with_changes("base_url", base_url)

        self._root_path = os.path.normpath(os.path.abspath(root))
        self._root = DirectoryNode(self._root_path, self._config.behaviors)
        self._cache: Dict[str, Node] = {}
        self._title_transformer: TitleTransformer = title_transformer or default_title

        logger.info(f"Repository opened at {self._root_path}")

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    @property
    def root(self) -> DirectoryNode:
        return self._root

    def get_root(self) -> DirectoryNode:
        return self._root

    def get_root_path(self) -> str:
        return self._root_path

    def get_title(self) -> str:
        """Explicit config title, else the root index title, else a derived one."""
        if self._config.title:
            return self._config.title
        title = self._root.get("title")
        if title is not None:
            return title
        return self._title_transformer(os.path.basename(self._root_path))

    def get_title_transformer(self) -> TitleTransformer:
        return self._title_transformer

    def get_config(self) -> Dict[str, Any]:
        data = self._config.to_dict()
        data["title"] = self.get_title()
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.get_config().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Update a repository setting in memory.

        Behavior keys are forwarded to the root directory and only affect
        children resolved after the change.
        """
        self._config = self._config.with_changes(key, value)
        if key in BEHAVIOR_KEYS:
            self._root.set_behavior(key, value)

    # -------------------------------------------------------------------------
    # Path Resolution
    # -------------------------------------------------------------------------
    def get_relative_path(self, path: Union[str, Node]) -> str:
        """
        Convert an absolute or root-relative path (or a node) to root-relative form.

        Returns:
            str: Relative path with `/` separators, "" for the root itself.

        Raises:
            OutOfBounds: If the path lies outside the root.
        """
        if isinstance(path, (ContentNode, DirectoryNode)):
            path = path.path
        return relative_to_root(path, self._root_path)

    def get_item(self, requested_path: Union[str, Node]) -> Node:
        """
        Resolve a path to its node, walking from the root on a cache miss.

        A bound index file resolves to its owning directory, so a directory
        and its index file share one node.

        Args:
            requested_path: Absolute or root-relative path.

        Returns:
            Node: The resolved, cached node.

        Raises:
            OutOfBounds: If the path lies outside the root.
            NotFound: If the path does not exist.
        """
        rel_path = self.get_relative_path(requested_path)
        if not rel_path:
            return self._root

        cached = self._cache.get(rel_path)
        if cached is not None:
            return cached

        components = split_components(rel_path)
        abs_path = os.path.join(self._root_path, *components)
        if not os.path.exists(abs_path):
            raise NotFound(f"File not found: [{abs_path}]")

        logger.debug(f"Cache miss for '{rel_path}', walking from root")

        node: Node = self._root
        accumulated: List[str] = []
        for component in components:
            if not isinstance(node, DirectoryNode):
                raise NotFound(f"Not a directory: [{node.path}] while resolving [{rel_path}]")

            accumulated.append(component)
            key = PATH_SEPARATOR.join(accumulated)

            child = self._cache.get(key)
            if child is None:
                child = node.get_file(component)
                if child is None:
                    raise NotFound(f"File not found: [{os.path.join(node.path, component)}]")
                if isinstance(child, ContentNode) and child.is_index():
                    child = node
                self._cache[key] = child
            node = child

        return node

    def get_files_in_directory(
            self,
            path: Union[str, Node],
            include_index: bool = False,
    ) -> List[Node]:
        """
        List the visible children of the directory at `path`.

        Raises:
            NotFound: If the path does not exist or is not a directory.
        """
        node = self.get_item(path)
        if not isinstance(node, DirectoryNode):
            raise NotFound(f"Not a directory: [{node.path}]")
        return node.get_files(include_index)

    # -------------------------------------------------------------------------
    # Breadcrumbs
    # -------------------------------------------------------------------------
    def get_breadcrumbs_for_item(self, item: Union[str, Node]) -> List[Breadcrumb]:
        """
        Build the trail of `{title, url}` entries from the root to an item.

        URLs are relative unless a base URL is configured. Directory segments
        end with a separator. An index file segment that resolves to the
        directory already in the trail adds no entry.

        Raises:
            OutOfBounds: If the item lies outside the root.
            NotFound: If a segment of the path does not exist.
        """
        rel_path = self.get_relative_path(item)

        base_url = self._config.base_url
        url = base_url.rstrip(PATH_SEPARATOR) + PATH_SEPARATOR if base_url else ""
        crumbs: List[Breadcrumb] = [{"title": self.get_title(), "url": url}]
        if not rel_path:
            return crumbs

        previous: Node = self._root
        accumulated: List[str] = []
        for component in split_components(rel_path):
            accumulated.append(component)
            node = self.get_item(PATH_SEPARATOR.join(accumulated))
            if node is previous:
                continue

            url += component
            if node.is_directory():
                url += PATH_SEPARATOR
            crumbs.append({"title": self._title_for(node, component), "url": url})
            previous = node

        return crumbs

    def _title_for(self, node: Node, segment: str) -> str:
        title = node.get("title")
        if title is not None:
            return title
        return self._title_transformer(segment)
