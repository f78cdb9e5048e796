"""
Node Store Module

Storage contract for the sparse Merkle tree plus the bundled backends.

Usage:
    from smtree.store import InMemoryNodeStore, FileNodeStore

    store = FileNodeStore("./tree-data")
"""
from .base import BaseNodeStore, NodeStoreProtocol
from .memory import InMemoryNodeStore
from .file import FileNodeStore
from .readonly import ReadOnlyNodeStore
from .factory import STORE_BACKENDS, create_store

__all__ = [
    "BaseNodeStore",
    "NodeStoreProtocol",
    "InMemoryNodeStore",
    "FileNodeStore",
    "ReadOnlyNodeStore",
    "STORE_BACKENDS",
    "create_store",
]
