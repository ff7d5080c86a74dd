from __future__ import annotations

"""
Source Discovery Service.

Walks a package directory and yields the files that match a glob pattern.
The walk is lazy and sorted so that repeated calls over the same tree
produce the same sequence.
"""

import fnmatch
import logging
import os
from typing import Iterator, Optional

from vsdeploy.core.paths import relative_path
from vsdeploy.domain.constants import DEFAULT_PATTERN
from vsdeploy.domain.sync_models import SourceEntry

logger = logging.getLogger(__name__)


def scan_source(source_dir: str, pattern: Optional[str] = DEFAULT_PATTERN) -> Iterator[SourceEntry]:
    """
    Traverse 'source_dir' recursively and yield every file matching 'pattern'.

    The pattern is a shell glob matched against the file name only
    (e.g. '*.dll'). Files whose size cannot be read are logged and skipped.

    Args:
        source_dir: Directory to scan.
        pattern: Glob applied to file names. None or blank means match all.

    Yields:
        SourceEntry: One record per matching file.
    """
    source_abs = os.path.abspath(source_dir)
    glob = (pattern or "").strip() or DEFAULT_PATTERN

    if not os.path.isdir(source_abs):
        logger.warning(f"Source directory does not exist: {source_abs}")
        return

    for root, dirs, files in os.walk(source_abs):
        dirs.sort()
        files.sort()

        for file_name in files:
            if not fnmatch.fnmatch(file_name, glob):
                continue

            file_path = os.path.join(root, file_name)
            try:
                size = os.path.getsize(file_path)
            except OSError as e:
                logger.warning(f"Cannot stat '{file_path}': {e}")
                continue

            yield SourceEntry(
                full_path=file_path,
                rel_path=relative_path(source_abs, file_path),
                size=size,
            )
