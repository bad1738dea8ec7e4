"""Local disk implementation of `FileSystem`."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Reads files straight from disk with `pathlib`."""

    def exists(self, path: Path) -> bool:
        return path.exists() and path.is_file()

    def read_text(self, path: Path) -> str:
        logger.debug("Reading text file %s", path)
        return path.read_text(encoding="utf-8")

    def read_bytes(self, path: Path) -> bytes:
        logger.debug("Reading binary file %s", path)
        return path.read_bytes()
