from __future__ import annotations

from .directory import DirectoryNode
from .memory import MemoryNode, MemorySlotTarget
from .project_file import ProjectFileTarget

__all__ = [
    "DirectoryNode",
    "MemoryNode",
    "MemorySlotTarget",
    "ProjectFileTarget",
]
