from __future__ import annotations

"""
Project Tree Synchronizer.

Mirrors the files of a source directory into a host-managed hierarchy and
removes them again. Adding creates the intermediate folder nodes on demand;
removing deletes only unmodified files and then prunes the folders it left
empty, never touching the synchronization root itself.

Host failures are isolated per file: they are logged, recorded in the
returned SyncReport and the scan moves on. InvalidPath is the only error
that aborts a call.
"""

import logging
import os
from typing import Iterable, List, Optional

from vsdeploy.core.paths import join_segments, split_segments
from vsdeploy.core.scanner import scan_source
from vsdeploy.domain.constants import DEFAULT_PATTERN
from vsdeploy.domain.errors import HostRejected
from vsdeploy.domain.host_models import HierarchyNode
from vsdeploy.domain.sync_models import SourceEntry, SyncError, SyncReport

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def add_tree(
        dest_root: HierarchyNode,
        source_dir: str,
        pattern: Optional[str] = DEFAULT_PATTERN,
        *,
        case_sensitive: Optional[bool] = None,
        entries: Optional[Iterable[SourceEntry]] = None,
) -> SyncReport:
    """
    Copy every matching source file into the hierarchy under 'dest_root'.

    Existing entries are never overwritten: a file whose name is already
    taken at its destination is reported as skipped.

    Args:
        dest_root: Node that mirrors 'source_dir'.
        source_dir: Directory to scan.
        pattern: Glob applied to file names.
        case_sensitive: Name matching mode. None follows the platform.
        entries: Pre-computed scan results; defaults to scan_source().

    Returns:
        SyncReport: Added, skipped and failed items.

    Raises:
        InvalidPath: If a scanned file is not under 'source_dir'.
    """
    glob = pattern or DEFAULT_PATTERN
    cs = resolve_case_sensitivity(case_sensitive)
    report = SyncReport(operation="add", source_dir=source_dir, pattern=glob)

    if entries is None:
        entries = scan_source(source_dir, glob)

    for entry in entries:
        segments = split_segments(entry.rel_path)
        if not segments:
            continue
        folders, file_name = segments[:-1], segments[-1]

        chain: List[HierarchyNode] = [dest_root]
        first_created: Optional[int] = None
        try:
            for seg in folders:
                parent = chain[-1]
                child = find_child(parent, seg, cs)
                if child is None:
                    child = parent.create_folder(seg)
                    if first_created is None:
                        first_created = len(chain)
                chain.append(child)

            if find_child(chain[-1], file_name, cs) is not None:
                logger.debug(f"Already present, skipping: {entry.rel_path}")
                report.skipped.append(entry.rel_path)
                continue

            with entry.open() as stream:
                chain[-1].create_file(file_name, stream)
            report.added.append(entry.rel_path)

        except (HostRejected, OSError) as e:
            logger.warning(f"Could not add '{entry.rel_path}': {e}")
            report.errors.append(SyncError(entry.rel_path, type(e).__name__, str(e)))
            if first_created is not None:
                _prune_empty_folders(chain, folders, report, stop_at=first_created)

    logger.info(
        f"Add from '{source_dir}' ({glob}): {len(report.added)} added, "
        f"{len(report.skipped)} skipped, {len(report.errors)} failed."
    )
    return report


def remove_tree(
        dest_root: HierarchyNode,
        source_dir: str,
        pattern: Optional[str] = DEFAULT_PATTERN,
        *,
        case_sensitive: Optional[bool] = None,
        entries: Optional[Iterable[SourceEntry]] = None,
) -> SyncReport:
    """
    Delete from 'dest_root' every file previously mirrored from 'source_dir'.

    A destination file is only deleted when its byte length equals the
    source file's; anything else is treated as user-modified and kept.
    Folders emptied by a deletion are removed bottom-up until a folder
    with remaining children, or 'dest_root', is reached.

    Args:
        dest_root: Node that mirrors 'source_dir'.
        source_dir: Directory to scan.
        pattern: Glob applied to file names.
        case_sensitive: Name matching mode. None follows the platform.
        entries: Pre-computed scan results; defaults to scan_source().

    Returns:
        SyncReport: Removed, pruned, skipped and failed items.

    Raises:
        InvalidPath: If a scanned file is not under 'source_dir'.
    """
    glob = pattern or DEFAULT_PATTERN
    cs = resolve_case_sensitivity(case_sensitive)
    report = SyncReport(operation="remove", source_dir=source_dir, pattern=glob)

    if entries is None:
        entries = scan_source(source_dir, glob)

    for entry in entries:
        segments = split_segments(entry.rel_path)
        if not segments:
            continue
        folders, file_name = segments[:-1], segments[-1]

        try:
            chain = _lookup_chain(dest_root, folders, cs)
            target = find_child(chain[-1], file_name, cs) if chain else None

            if target is None or not target.is_file:
                logger.debug(f"Not present, skipping: {entry.rel_path}")
                report.skipped.append(entry.rel_path)
                continue

            if target.size != entry.size:
                logger.info(
                    f"Keeping modified file '{entry.rel_path}' "
                    f"({target.size} bytes, source has {entry.size})."
                )
                report.skipped.append(entry.rel_path)
                continue

            target.delete()
            report.removed.append(entry.rel_path)

        except HostRejected as e:
            logger.warning(f"Could not remove '{entry.rel_path}': {e}")
            report.errors.append(SyncError(entry.rel_path, type(e).__name__, str(e)))
            continue

        _prune_empty_folders(chain, folders, report)

    logger.info(
        f"Remove from '{source_dir}' ({glob}): {len(report.removed)} removed, "
        f"{len(report.pruned)} folders pruned, {len(report.skipped)} skipped, "
        f"{len(report.errors)} failed."
    )
    return report


def resolve_case_sensitivity(case_sensitive: Optional[bool]) -> bool:
    """Resolve None to the case rules of the running platform."""
    if case_sensitive is None:
        return os.path.normcase("A") == "A"
    return bool(case_sensitive)


def find_child(node: HierarchyNode, name: str, case_sensitive: bool = True) -> Optional[HierarchyNode]:
    """
    Look up a direct child by name.

    Args:
        node: Parent node.
        name: Child name.
        case_sensitive: Whether 'Lib' and 'lib' are distinct.

    Returns:
        Optional[HierarchyNode]: The first matching child, or None.
    """
    key = name if case_sensitive else name.casefold()
    for child in node.children():
        child_key = child.name if case_sensitive else child.name.casefold()
        if child_key == key:
            return child
    return None


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _lookup_chain(
        dest_root: HierarchyNode,
        folders: List[str],
        case_sensitive: bool,
) -> List[HierarchyNode]:
    """
    Resolve the folder nodes along 'folders' without creating any.

    Returns:
        List[HierarchyNode]: [dest_root, ...folders], or [] when a segment is missing.
    """
    chain = [dest_root]
    for seg in folders:
        child = find_child(chain[-1], seg, case_sensitive)
        if child is None or child.is_file:
            return []
        chain.append(child)
    return chain


def _prune_empty_folders(
        chain: List[HierarchyNode],
        folders: List[str],
        report: SyncReport,
        stop_at: int = 1,
) -> None:
    """
    Delete childless folders from the bottom of 'chain' upwards.

    chain[0] is the synchronization root and is never deleted. The walk
    stops at the first folder that still has children or at index 'stop_at'.
    """
    for depth in range(len(chain) - 1, max(stop_at, 1) - 1, -1):
        node = chain[depth]
        rel = join_segments("", *folders[:depth])
        try:
            if node.child_count() > 0:
                return
            node.delete()
        except HostRejected as e:
            logger.warning(f"Could not prune folder '{rel}': {e}")
            report.errors.append(SyncError(rel, type(e).__name__, str(e)))
            return
        logger.debug(f"Pruned empty folder: {rel}")
        report.pruned.append(rel)
