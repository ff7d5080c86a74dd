from __future__ import annotations

"""
Path Mapping Helpers.

Translates between a source directory and the mirrored destination layout.
Paths are treated as plain strings; nothing here touches the filesystem.
"""

import os
import re
from typing import List

from vsdeploy.domain.errors import InvalidPath

_SEPARATORS = tuple(s for s in (os.sep, os.altsep) if s)
_SPLIT_RX = re.compile(r"[\\/]+")


def relative_path(root: str, full_path: str) -> str:
    """
    Strip 'root' and the following separator from 'full_path'.

    Comparison follows the platform's case rules (os.path.normcase).

    Args:
        root: Directory the path is expected to live under.
        full_path: Path to make relative.

    Returns:
        str: The remainder of 'full_path' after the root ('' for the root itself).

    Raises:
        InvalidPath: If 'full_path' is not located under 'root'.
    """
    trimmed = root.rstrip("".join(_SEPARATORS)) if root not in _SEPARATORS else root
    norm_root = os.path.normcase(trimmed)
    norm_full = os.path.normcase(full_path)

    if norm_full == norm_root:
        return ""
    if not trimmed or not norm_full.startswith(norm_root):
        raise InvalidPath(root, full_path)

    rest = full_path[len(trimmed):]
    if trimmed in _SEPARATORS:
        return rest
    if not rest.startswith(_SEPARATORS):
        # '/src' is a textual prefix of '/srcfoo' but not its parent
        raise InvalidPath(root, full_path)
    return rest[1:]


def join_segments(base: str, *segments: str) -> str:
    """
    Join path segments with the platform separator.

    '..' segments are kept verbatim; empty segments are ignored.
    """
    parts = [s for s in segments if s]
    if not parts:
        return base
    return os.path.join(base, *parts)


def split_segments(rel_path: str) -> List[str]:
    """
    Split a relative path on either separator style into ordered segments.
    """
    return [p for p in _SPLIT_RX.split(rel_path) if p]
