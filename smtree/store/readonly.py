"""
Module 04 - Read-Only Node Store

Wraps another store and rejects every mutation. Useful for serving proofs
from a store that another process owns.
"""

from typing import Optional

from smtree.schemas.errors import UnsupportedOperationException
from smtree.store.base import BaseNodeStore, NodeStoreProtocol


class ReadOnlyNodeStore(BaseNodeStore):
    """Read-only view over ``inner``; set/remove raise UnsupportedOperationException."""

    backend = "readonly"

    def __init__(self, inner: NodeStoreProtocol) -> None:
        self.inner = inner

    def __repr__(self) -> str:
        return f"ReadOnlyNodeStore(inner={self.inner!r})"

    def get(self, key: bytes) -> Optional[bytes]:
        return self.inner.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        raise UnsupportedOperationException(
            "Store is read-only",
            operation="set",
        )

    def remove(self, key: bytes) -> None:
        raise UnsupportedOperationException(
            "Store is read-only",
            operation="remove",
        )
