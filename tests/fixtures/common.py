"""
Common test fixtures shared by all modules.

Provides factory functions for:
- keys and values of the [n; 32] form
- trees over an in-memory store
- a node store that fails on demand
"""

from typing import Optional

from smtree.merkle import SparseMerkleTree, TreeHasher
from smtree.schemas.errors import StoreException
from smtree.store import InMemoryNodeStore


# =============================================================================
# Key / Value Factories
# =============================================================================

def make_key(n: int) -> bytes:
    """32-byte key with every byte equal to ``n % 256``."""
    return bytes([n % 256]) * 32


def make_value(n: int) -> bytes:
    """32-byte value with every byte equal to ``n % 256``."""
    return bytes([n % 256]) * 32


# =============================================================================
# Tree Factories
# =============================================================================

def make_tree(
    store: Optional[InMemoryNodeStore] = None,
    hasher: Optional[TreeHasher] = None,
) -> SparseMerkleTree:
    return SparseMerkleTree(store if store is not None else InMemoryNodeStore(), hasher=hasher)


def make_populated_tree() -> SparseMerkleTree:
    """Tree with [1;32] -> [10;32] and [2;32] -> [20;32]."""
    tree = make_tree()
    tree.update(make_key(1), make_value(10))
    tree.update(make_key(2), make_value(20))
    return tree


# =============================================================================
# Failing Store
# =============================================================================

class FailingNodeStore(InMemoryNodeStore):
    """
    In-memory store that raises StoreException once armed.

    Args:
        fail_after: Number of successful set() calls before failing;
            None never fails
    """

    backend = "failing"

    def __init__(self, fail_after: Optional[int] = None) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.set_calls = 0

    def set(self, key: bytes, value: bytes) -> None:
        if self.fail_after is not None and self.set_calls >= self.fail_after:
            raise StoreException("simulated write failure", operation="set")
        self.set_calls += 1
        super().set(key, value)

    def remove(self, key: bytes) -> None:
        if self.fail_after is not None and self.set_calls >= self.fail_after:
            raise StoreException("simulated remove failure", operation="remove")
        super().remove(key)
