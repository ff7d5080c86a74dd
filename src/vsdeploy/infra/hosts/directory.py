from __future__ import annotations

"""
Directory-Backed Hierarchy.

Exposes a directory on disk through the HierarchyNode interface so the
synchronizer can mirror package content into a plain project folder.
"""

import os
import shutil
from typing import BinaryIO, List, Optional

from vsdeploy.domain.errors import HostRejected
from vsdeploy.domain.host_models import HierarchyNode


class DirectoryNode(HierarchyNode):
    """
    A file or folder on the local filesystem.

    Existing files are never overwritten: create_file opens in exclusive mode.
    """

    def __init__(self, path: str, name: Optional[str] = None):
        self._path = os.path.abspath(path)
        self._name = name if name is not None else os.path.basename(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_file(self) -> bool:
        return os.path.isfile(self._path)

    @property
    def size(self) -> int:
        if not self.is_file:
            return 0
        try:
            return os.path.getsize(self._path)
        except OSError as e:
            raise HostRejected("stat", self._name, e) from e

    def children(self) -> List[HierarchyNode]:
        if not os.path.isdir(self._path):
            return []
        try:
            names = sorted(os.listdir(self._path))
        except OSError as e:
            raise HostRejected("enumerate", self._name, e) from e
        return [DirectoryNode(os.path.join(self._path, n), n) for n in names]

    def create_folder(self, name: str) -> HierarchyNode:
        target = os.path.join(self._path, name)
        try:
            os.mkdir(target)
        except OSError as e:
            raise HostRejected("create folder", name, e) from e
        return DirectoryNode(target, name)

    def create_file(self, name: str, stream: BinaryIO) -> HierarchyNode:
        target = os.path.join(self._path, name)
        try:
            with open(target, "xb") as out:
                try:
                    shutil.copyfileobj(stream, out)
                except OSError:
                    out.close()
                    os.remove(target)
                    raise
        except OSError as e:
            raise HostRejected("create file", name, e) from e
        return DirectoryNode(target, name)

    def delete(self) -> None:
        try:
            if os.path.isdir(self._path) and not os.path.islink(self._path):
                shutil.rmtree(self._path)
            else:
                os.remove(self._path)
        except OSError as e:
            raise HostRejected("delete", self._name, e) from e
