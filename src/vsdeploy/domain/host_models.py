from __future__ import annotations

"""
Host Capability Interfaces.

Abstract seams between the synchronization core and the host automation
object model. The core only ever talks to these interfaces; concrete
providers live under 'vsdeploy.infra.hosts'.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, List

# -----------------------------------------------------------------------------
# HIERARCHY PROVIDER
# -----------------------------------------------------------------------------

class HierarchyNode(ABC):
    """
    A folder or file entry in a host-managed project hierarchy.

    Implementations raise HostRejected when the host refuses a mutation.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the entry inside its parent."""

    @property
    @abstractmethod
    def is_file(self) -> bool:
        """True when the node wraps a file payload."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Byte length of the payload (0 for folders)."""

    @abstractmethod
    def children(self) -> List[HierarchyNode]:
        """Enumerate the direct children of this node."""

    @abstractmethod
    def create_folder(self, name: str) -> HierarchyNode:
        """
        Create a child folder node.

        Args:
            name: Name of the new folder.

        Returns:
            HierarchyNode: The created child.
        """

    @abstractmethod
    def create_file(self, name: str, stream: BinaryIO) -> HierarchyNode:
        """
        Create a child file node from a byte stream.

        Args:
            name: Name of the new file.
            stream: Readable binary stream holding the payload.

        Returns:
            HierarchyNode: The created child.
        """

    @abstractmethod
    def delete(self) -> None:
        """Remove this node (and its payload) from the hierarchy."""

    def child_count(self) -> int:
        """Number of direct children."""
        return len(self.children())

    def __repr__(self) -> str:
        kind = "file" if self.is_file else "folder"
        return f"<{type(self).__name__} {kind} '{self.name}'>"

# -----------------------------------------------------------------------------
# CONFIGURATION SLOT PROVIDER
# -----------------------------------------------------------------------------

class SlotTarget(ABC):
    """
    An object exposing named text properties (build event slots).

    Implementations raise SlotUnavailable for properties they do not expose.
    """

    @abstractmethod
    def get_property(self, name: str) -> str:
        """Read the current text of a property."""

    @abstractmethod
    def set_property(self, name: str, value: str) -> None:
        """Replace the text of a property."""
