from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation to ensure the 'src' directory is importable.
2. Shared source trees and destination hierarchies used across tests.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from vsdeploy.infra.hosts import MemoryNode  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """
    Create a package content directory.

    Structure:
    /package
      /a
        b.dll        (10 bytes)
        b.pdb
      /a/deep
        c.dll
      root.dll
      readme.txt
    """
    root = tmp_path / "package"
    (root / "a" / "deep").mkdir(parents=True)
    (root / "a" / "b.dll").write_bytes(b"0123456789")
    (root / "a" / "b.pdb").write_bytes(b"symbols")
    (root / "a" / "deep" / "c.dll").write_bytes(b"native")
    (root / "root.dll").write_bytes(b"managed")
    (root / "readme.txt").write_text("docs", encoding="utf-8")
    return root


@pytest.fixture
def memory_root() -> MemoryNode:
    """An empty in-memory project folder."""
    return MemoryNode("project")
