# Path: assetindex/core/indexing/scanner.py
# Purpose: Scan folders and collect image and metadata sidecar paths.
# Layer: core/indexing.
# Details: Unreadable subdirectories are logged and skipped so one bad folder never aborts a run.

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List

from assetindex.common.logging import get_logger
from assetindex.core.models.sidecar import METADATA_SUFFIX

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg"}

log = get_logger(__name__)


class ImageScanner:
    """Scan filesystem paths for supported image files."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def scan(self) -> List[Path]:
        """Return every image file under the root, depth-first in name order."""

        return [path for path in self._walk(self.root) if path.suffix.lower() in SUPPORTED_EXTENSIONS]

    def scan_metadata(self) -> List[Path]:
        """Return every metadata sidecar under the root, sorted by path."""

        return sorted(path for path in self._walk(self.root) if path.name.endswith(METADATA_SUFFIX))

    def _walk(self, directory: Path) -> Iterator[Path]:
        """Yield regular files under ``directory``, recursing into subdirectories."""

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            log.error("Error reading directory %s: %s", directory, exc)
            return

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._walk(path)
                elif entry.is_file(follow_symlinks=False):
                    yield path
            except OSError as exc:
                log.error("Error reading %s: %s", path, exc)
