from __future__ import annotations

from .content import ContentNode
from .directory import DirectoryNode, Node

__all__ = [
    "ContentNode",
    "DirectoryNode",
    "Node",
]
