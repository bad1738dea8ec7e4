"""File-system contract used by the reader and the validator.

Why Protocol:
- The core only needs four read-only operations; anything providing them
  (local disk, an in-memory fake in tests) can be passed in.
- Keeps `pathlib` details in the adapter layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Minimal read-only file-system operations."""

    def exists(self, path: Path) -> bool:
        """Return True when `path` is an existing regular file."""

        ...

    def read_text(self, path: Path) -> str:
        """Read `path` as UTF-8 text."""

        ...

    def read_bytes(self, path: Path) -> bytes:
        ...
