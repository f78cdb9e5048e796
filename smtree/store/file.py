"""
Module 04 - File Node Store

Disk-backed node store: one file per entry.

Layout:
    <root>/<first byte hex>/<full key hex>

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a reader never sees a half-written entry.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from smtree.schemas.errors import StoreException
from smtree.store.base import BaseNodeStore


logger = logging.getLogger(__name__)


class FileNodeStore(BaseNodeStore):
    """
    Node store persisted as files under a directory.

    Args:
        path: Directory to hold the entries (created if missing)
    """

    backend = "file"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreException(
                f"Cannot create store directory {self.path}: {e}",
                operation="open",
            ) from e
        logger.debug(f"Opened file node store at {self.path}")

    def __repr__(self) -> str:
        return f"FileNodeStore(path={str(self.path)!r})"

    def _entry_path(self, key: bytes) -> Path:
        if not key:
            raise StoreException("Store keys must be non-empty", operation="path")
        name = bytes(key).hex()
        return self.path / name[:2] / name

    def get(self, key: bytes) -> Optional[bytes]:
        entry = self._entry_path(key)
        try:
            return entry.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreException(
                f"Failed to read {entry}: {e}",
                operation="get",
                key=entry.name,
            ) from e

    def set(self, key: bytes, value: bytes) -> None:
        entry = self._entry_path(key)
        try:
            entry.parent.mkdir(exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=entry.parent, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(bytes(value))
                os.replace(tmp_name, entry)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreException(
                f"Failed to write {entry}: {e}",
                operation="set",
                key=entry.name,
            ) from e

    def remove(self, key: bytes) -> None:
        entry = self._entry_path(key)
        try:
            entry.unlink(missing_ok=True)
        except OSError as e:
            raise StoreException(
                f"Failed to remove {entry}: {e}",
                operation="remove",
                key=entry.name,
            ) from e

    def __iter__(self) -> Iterator[bytes]:
        for shard in sorted(self.path.iterdir()):
            if not shard.is_dir():
                continue
            for entry in sorted(shard.iterdir()):
                if entry.name.startswith("."):
                    continue
                yield bytes.fromhex(entry.name)

    def __len__(self) -> int:
        return sum(1 for _ in self)
