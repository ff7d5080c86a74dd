from __future__ import annotations

"""
Unit tests for the Project Tree Synchronizer.

Runs add/remove flows against an in-memory hierarchy and verifies folder
creation, idempotency, the size-based identity check, the empty-folder
cascade and per-file failure isolation.
"""

import io
from pathlib import Path
from typing import Iterator, List
from unittest.mock import patch

import pytest

from vsdeploy.core.tree_sync import add_tree, find_child, remove_tree, resolve_case_sensitivity
from vsdeploy.domain.errors import HostRejected, InvalidPath
from vsdeploy.domain.sync_models import SourceEntry
from vsdeploy.infra.hosts import MemoryNode

_ORIGINAL_CREATE_FILE = MemoryNode.create_file
_ORIGINAL_DELETE = MemoryNode.delete


# -----------------------------------------------------------------------------
# ADD FLOW
# -----------------------------------------------------------------------------

def test_add_creates_folders_then_file(tmp_path: Path, memory_root: MemoryNode) -> None:
    src = tmp_path / "src"
    (src / "a").mkdir(parents=True)
    (src / "a" / "b.dll").write_bytes(b"0123456789")

    report = add_tree(memory_root, str(src), "*.dll")

    assert report.ok
    assert memory_root.folder_paths() == ["a"]
    assert memory_root.file_paths() == ["a/b.dll"]
    assert memory_root.find("a/b.dll").data == b"0123456789"


def test_add_applies_filter(package_dir: Path, memory_root: MemoryNode) -> None:
    add_tree(memory_root, str(package_dir), "*.dll")
    assert memory_root.file_paths() == ["a/b.dll", "a/deep/c.dll", "root.dll"]


def test_add_never_overwrites_existing_entries(package_dir: Path, memory_root: MemoryNode) -> None:
    memory_root.create_file("root.dll", io.BytesIO(b"user copy"))

    report = add_tree(memory_root, str(package_dir), "*.dll")

    assert "root.dll" in report.skipped
    assert memory_root.find("root.dll").data == b"user copy"


def test_add_is_idempotent(package_dir: Path, memory_root: MemoryNode) -> None:
    add_tree(memory_root, str(package_dir))
    snapshot = memory_root.file_paths()

    second = add_tree(memory_root, str(package_dir))

    assert second.added == []
    assert len(second.skipped) == 5
    assert memory_root.file_paths() == snapshot


def test_add_continues_after_host_rejection(package_dir: Path, memory_root: MemoryNode) -> None:
    """A rejected file is reported and the folder created for it is pruned."""

    def reject_b_dll(self, name, stream):
        if name == "b.dll":
            raise HostRejected("create file", name, "read-only")
        return _ORIGINAL_CREATE_FILE(self, name, stream)

    with patch.object(MemoryNode, "create_file", autospec=True, side_effect=reject_b_dll):
        report = add_tree(memory_root, str(package_dir))

    assert [e.kind for e in report.errors] == ["HostRejected"]
    assert report.errors[0].rel_path.endswith("b.dll")
    assert not report.ok
    assert report.pruned == ["a"]
    assert memory_root.file_paths() == ["a/b.pdb", "a/deep/c.dll", "readme.txt", "root.dll"]


def test_add_closes_source_stream_when_host_rejects(package_dir: Path, memory_root: MemoryNode) -> None:
    seen: List[object] = []

    def reject_all(self, name, stream):
        seen.append(stream)
        raise HostRejected("create file", name)

    with patch.object(MemoryNode, "create_file", autospec=True, side_effect=reject_all):
        report = add_tree(memory_root, str(package_dir), "*.dll")

    assert len(report.errors) == 3
    assert seen and all(s.closed for s in seen)
    assert memory_root.children() == []


def test_add_case_insensitive_collision_skips_second(tmp_path: Path, memory_root: MemoryNode) -> None:
    payload = tmp_path / "x.dll"
    payload.write_bytes(b"x")
    entries = [
        SourceEntry(str(payload), "Lib/x.dll", 1),
        SourceEntry(str(payload), "lib/X.dll", 1),
    ]

    report = add_tree(memory_root, str(tmp_path), case_sensitive=False, entries=entries)

    assert report.added == ["Lib/x.dll"]
    assert report.skipped == ["lib/X.dll"]
    assert memory_root.file_paths() == ["Lib/x.dll"]


def test_add_case_sensitive_keeps_both(tmp_path: Path, memory_root: MemoryNode) -> None:
    payload = tmp_path / "x.dll"
    payload.write_bytes(b"x")
    entries = [
        SourceEntry(str(payload), "Lib/x.dll", 1),
        SourceEntry(str(payload), "lib/X.dll", 1),
    ]

    report = add_tree(memory_root, str(tmp_path), case_sensitive=True, entries=entries)

    assert len(report.added) == 2
    assert memory_root.file_paths() == ["Lib/x.dll", "lib/X.dll"]


def test_invalid_path_aborts_the_call(memory_root: MemoryNode) -> None:
    def broken_scan() -> Iterator[SourceEntry]:
        raise InvalidPath("/src", "/elsewhere/x.dll")
        yield  # pragma: no cover

    with pytest.raises(InvalidPath):
        add_tree(memory_root, "/src", entries=broken_scan())


# -----------------------------------------------------------------------------
# REMOVE FLOW
# -----------------------------------------------------------------------------

def test_remove_deletes_file_then_empty_folder(tmp_path: Path, memory_root: MemoryNode) -> None:
    src = tmp_path / "src"
    (src / "a").mkdir(parents=True)
    (src / "a" / "b.dll").write_bytes(b"0123456789")
    add_tree(memory_root, str(src), "*.dll")

    report = remove_tree(memory_root, str(src), "*.dll")

    assert report.removed == [str(Path("a") / "b.dll")]
    assert report.pruned == ["a"]
    assert memory_root.children() == []


def test_add_then_remove_restores_destination(package_dir: Path, memory_root: MemoryNode) -> None:
    memory_root.create_file("keep.txt", io.BytesIO(b"mine"))
    folder = memory_root.create_folder("a")
    folder.create_file("mine.cs", io.BytesIO(b"class Mine {}"))
    before_files = memory_root.file_paths()

    add_tree(memory_root, str(package_dir))
    report = remove_tree(memory_root, str(package_dir))

    assert report.ok
    assert memory_root.file_paths() == before_files
    assert memory_root.folder_paths() == ["a"]


def test_remove_keeps_modified_file(memory_root: MemoryNode, package_dir: Path) -> None:
    folder = memory_root.create_folder("a")
    folder.create_file("b.dll", io.BytesIO(b"edited by user"))

    report = remove_tree(memory_root, str(package_dir), "b.dll")

    assert report.removed == []
    assert report.skipped == [str(Path("a") / "b.dll")]
    assert memory_root.file_paths() == ["a/b.dll"]


def test_remove_missing_destination_is_silent(package_dir: Path, memory_root: MemoryNode) -> None:
    report = remove_tree(memory_root, str(package_dir))

    assert report.ok
    assert report.removed == []
    assert len(report.skipped) == 5


def test_remove_cascade_stops_at_populated_ancestor(package_dir: Path, memory_root: MemoryNode) -> None:
    add_tree(memory_root, str(package_dir))

    report = remove_tree(memory_root, str(package_dir), "c.dll")

    assert report.pruned == [str(Path("a") / "deep")]
    assert memory_root.folder_paths() == ["a"]


def test_remove_never_deletes_root(package_dir: Path) -> None:
    parent = MemoryNode("solution")
    root = parent.create_folder("project")
    add_tree(root, str(package_dir))

    remove_tree(root, str(package_dir))

    assert root.children() == []
    assert parent.children() == [root]


def test_remove_continues_after_delete_rejection(package_dir: Path, memory_root: MemoryNode) -> None:
    add_tree(memory_root, str(package_dir), "*.dll")

    def reject_b_dll(self):
        if self.name == "b.dll":
            raise HostRejected("delete", self.name, "locked")
        return _ORIGINAL_DELETE(self)

    with patch.object(MemoryNode, "delete", autospec=True, side_effect=reject_b_dll):
        report = remove_tree(memory_root, str(package_dir), "*.dll")

    assert len(report.errors) == 1
    assert len(report.removed) == 2
    # 'a' still holds the locked b.dll
    assert memory_root.file_paths() == ["a/b.dll"]


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def test_find_child_case_modes(memory_root: MemoryNode) -> None:
    memory_root.create_folder("Lib")
    assert find_child(memory_root, "lib", case_sensitive=True) is None
    assert find_child(memory_root, "lib", case_sensitive=False).name == "Lib"


def test_resolve_case_sensitivity_follows_platform() -> None:
    with patch("vsdeploy.core.tree_sync.os.path.normcase", side_effect=str.lower):
        assert resolve_case_sensitivity(None) is False
    with patch("vsdeploy.core.tree_sync.os.path.normcase", side_effect=lambda s: s):
        assert resolve_case_sensitivity(None) is True
    assert resolve_case_sensitivity(False) is False
