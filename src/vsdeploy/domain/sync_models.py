from __future__ import annotations

"""
Synchronization Domain Data Models.

Defines the records exchanged between the source scanner, the tree
synchronizer and the interface layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, List, Optional

from vsdeploy.domain.constants import (
    POST_BUILD_PROPERTY,
    PRE_BUILD_PROPERTY,
    SLOT_ALIASES,
)

# -----------------------------------------------------------------------------
# SOURCE SIDE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceEntry:
    """
    A file discovered under a source directory.

    Attributes:
        full_path: Absolute filesystem path.
        rel_path: Path relative to the scan root (native separators).
        size: Byte length at scan time.
    """
    full_path: str
    rel_path: str
    size: int

    def open(self) -> BinaryIO:
        """Open the payload for reading. The caller owns the handle."""
        return open(self.full_path, "rb")

# -----------------------------------------------------------------------------
# BUILD EVENT SLOTS
# -----------------------------------------------------------------------------

class BuildStepSlot(Enum):
    """The two build event slots of a project configuration."""
    PRE = PRE_BUILD_PROPERTY
    POST = POST_BUILD_PROPERTY

    @property
    def property_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: object) -> Optional[BuildStepSlot]:
        """
        Resolve a slot from an enum member or a loose name ('Pre', 'post').

        Returns:
            Optional[BuildStepSlot]: The slot, or None when unrecognized.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = SLOT_ALIASES.get(value.strip().lower())
        return cls[key] if key else None

# -----------------------------------------------------------------------------
# REPORTING
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyncError:
    """
    A single item the synchronizer could not process.

    Attributes:
        rel_path: Source path relative to the scan root.
        kind: Error class name (e.g. 'HostRejected').
        error: Human readable description.
    """
    rel_path: str
    kind: str
    error: str


@dataclass
class SyncReport:
    """
    Outcome of one add/remove synchronization call.

    Attributes:
        operation: 'add' or 'remove'.
        source_dir: Scanned source directory.
        pattern: Glob applied to file names.
        added: Relative paths of files attached to the hierarchy.
        removed: Relative paths of files deleted from the hierarchy.
        skipped: Relative paths left untouched (already present, missing, modified).
        pruned: Relative paths of folders removed by the empty-folder cascade.
        errors: Items rejected by the host.
    """
    operation: str
    source_dir: str
    pattern: str
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    pruned: List[str] = field(default_factory=list)
    errors: List[SyncError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
