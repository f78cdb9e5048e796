"""
Module 04 - In-Memory Node Store

Dict-backed reference implementation, used by tests and short-lived trees.
"""

from typing import Iterator, Optional

from smtree.store.base import BaseNodeStore


class InMemoryNodeStore(BaseNodeStore):
    """Node store kept entirely in a Python dict."""

    backend = "memory"

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[bytes]:
        return iter(list(self._data))

    def clear(self) -> None:
        self._data.clear()
