from __future__ import annotations

"""
In-Memory Host Providers.

A hierarchy and a slot target that live entirely in memory. Used for dry
runs (a snapshot of a real directory is synchronized instead of the
directory itself) and as stand-ins for the host in tests.
"""

import os
from typing import BinaryIO, Dict, Iterable, List, Optional

from vsdeploy.domain.constants import POST_BUILD_PROPERTY, PRE_BUILD_PROPERTY
from vsdeploy.domain.errors import HostRejected, SlotUnavailable
from vsdeploy.domain.host_models import HierarchyNode, SlotTarget

# -----------------------------------------------------------------------------
# HIERARCHY
# -----------------------------------------------------------------------------

class MemoryNode(HierarchyNode):
    """
    A node of an in-memory tree. Folders hold children; files hold bytes.
    """

    def __init__(self, name: str = "", data: Optional[bytes] = None, parent: Optional[MemoryNode] = None):
        self._name = name
        self._data = data
        self._parent = parent
        self._children: List[MemoryNode] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_file(self) -> bool:
        return self._data is not None

    @property
    def size(self) -> int:
        return len(self._data) if self._data is not None else 0

    @property
    def data(self) -> Optional[bytes]:
        return self._data

    @property
    def parent(self) -> Optional[MemoryNode]:
        return self._parent

    def children(self) -> List[HierarchyNode]:
        return list(self._children)

    def create_folder(self, name: str) -> HierarchyNode:
        return self._attach(name, None)

    def create_file(self, name: str, stream: BinaryIO) -> HierarchyNode:
        return self._attach(name, stream.read())

    def delete(self) -> None:
        if self._parent is None:
            raise HostRejected("delete", self._name, "node is not attached to a parent")
        self._parent._children.remove(self)
        self._parent = None

    # -------------------------------------------------------------------------
    # Inspection helpers
    # -------------------------------------------------------------------------

    def find(self, rel_path: str) -> Optional[MemoryNode]:
        """Resolve a '/' or '\\' separated path below this node (exact case)."""
        node: Optional[MemoryNode] = self
        for seg in rel_path.replace("\\", "/").split("/"):
            if not seg:
                continue
            node = next((c for c in node._children if c._name == seg), None) if node else None
        return node

    def file_paths(self) -> List[str]:
        """Sorted '/' separated paths of every file below this node."""
        out: List[str] = []
        for child in self._children:
            if child.is_file:
                out.append(child._name)
            else:
                out.extend(f"{child._name}/{p}" for p in child.file_paths())
        return sorted(out)

    def folder_paths(self) -> List[str]:
        """Sorted '/' separated paths of every folder below this node."""
        out: List[str] = []
        for child in self._children:
            if not child.is_file:
                out.append(child._name)
                out.extend(f"{child._name}/{p}" for p in child.folder_paths())
        return sorted(out)

    @classmethod
    def from_directory(cls, path: str) -> MemoryNode:
        """
        Snapshot a directory tree. File payloads are read eagerly.
        """
        root = cls(os.path.basename(os.path.abspath(path)))
        if os.path.isdir(path):
            root._load(path)
        return root

    def _load(self, path: str) -> None:
        for entry in sorted(os.listdir(path)):
            full = os.path.join(path, entry)
            if os.path.isdir(full):
                child = MemoryNode(entry, None, self)
                self._children.append(child)
                child._load(full)
            else:
                with open(full, "rb") as f:
                    self._children.append(MemoryNode(entry, f.read(), self))

    def _attach(self, name: str, data: Optional[bytes]) -> MemoryNode:
        if self.is_file:
            raise HostRejected("create", name, f"'{self._name}' is a file")
        if any(c._name == name for c in self._children):
            raise HostRejected("create", name, "an item with this name already exists")
        child = MemoryNode(name, data, self)
        self._children.append(child)
        return child

# -----------------------------------------------------------------------------
# CONFIGURATION SLOTS
# -----------------------------------------------------------------------------

class MemorySlotTarget(SlotTarget):
    """
    Dict-backed build configuration.

    Args:
        properties: Initial property values.
        exposed: Property names the target supports; defaults to the two build events.
    """

    def __init__(self, properties: Optional[Dict[str, str]] = None, exposed: Optional[Iterable[str]] = None):
        self.properties: Dict[str, str] = dict(properties or {})
        self.exposed = set(exposed) if exposed is not None else {PRE_BUILD_PROPERTY, POST_BUILD_PROPERTY}

    def get_property(self, name: str) -> str:
        if name not in self.exposed:
            raise SlotUnavailable(name)
        return self.properties.get(name, "")

    def set_property(self, name: str, value: str) -> None:
        if name not in self.exposed:
            raise SlotUnavailable(name)
        self.properties[name] = value
