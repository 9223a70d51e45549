from __future__ import annotations

"""
servedown: resolve a tree of content files into addressable, cached nodes.
"""

from servedown.core.nodes import ContentNode, DirectoryNode, Node
from servedown.core.repository import Repository
from servedown.domain.config import Behaviors, RepositoryConfig, load_repository_config
from servedown.domain.errors import (
    InvalidIndex,
    InvalidPath,
    NotFound,
    OutOfBounds,
    ParseError,
    ServedownError,
)

__version__ = "0.1.0"

__all__ = [
    "Behaviors",
    "ContentNode",
    "DirectoryNode",
    "InvalidIndex",
    "InvalidPath",
    "Node",
    "NotFound",
    "OutOfBounds",
    "ParseError",
    "Repository",
    "RepositoryConfig",
    "ServedownError",
    "load_repository_config",
]
