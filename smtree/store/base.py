"""
Module 04 - Node Store Interface

Defines the storage contract the sparse Merkle tree depends on.

A node store maps 32-byte keys to opaque byte blobs. The tree keeps two
kinds of entries in it:
- node records: digest -> left || right (64 bytes), content-addressed
- the value index: 0x02 || key path -> value (33 bytes, never a node key)

Because node records are content-addressed, two writers storing the same
digest always store identical bytes, so last-write-wins is sufficient.
"""

from abc import ABC, abstractmethod
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class NodeStoreProtocol(Protocol):
    """Protocol defining the node store interface."""

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the blob stored under ``key``, or None."""
        ...

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key`` (last write wins)."""
        ...

    def remove(self, key: bytes) -> None:
        """Delete ``key``; deleting an absent key is not an error."""
        ...


class BaseNodeStore(ABC):
    """
    Abstract base class for node store backends.

    Backends raise StoreException for I/O failures and
    UnsupportedOperationException for capabilities they lack.
    """

    backend: str = "base"

    @abstractmethod
    def get(self, key: bytes) -> Optional[bytes]:
        ...

    @abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        ...

    @abstractmethod
    def remove(self, key: bytes) -> None:
        ...

    def __contains__(self, key: bytes) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(backend={self.backend!r})"
