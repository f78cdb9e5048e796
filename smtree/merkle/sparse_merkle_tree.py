"""
Module 03 - Sparse Merkle Tree Engine
Authenticated key-value index over a 256-bit key space.

This module provides:
- SparseMerkleTree: update / get / remove / proof generation / verification
  on top of a node store and a TreeHasher

Storage layout (all in one node store):
- node record:  digest -> left || right  (64 bytes, content-addressed)
- value index:  0x02 || key path -> value  (33-byte keys, so an index
                 entry can never overwrite a 32-byte node record)

Write discipline:
- Every mutation first reads the current siblings along the key's path,
  then folds the new leaf (or the empty digest, for remove) up to the root
- All node records are written, then the value index entry, and only then
  is the new root published; a store failure anywhere leaves the root
  unchanged
- Superseded node records are never deleted

The tree is single-writer. Readers may run alongside a writer and will see
either the previous or the new root.
"""
from __future__ import annotations

import logging
from typing import Optional

from smtree.config.runtime import RuntimeConfig, get_default_config
from smtree.crypto.hashing import get_hash_function, short_hex, to_hex
from smtree.merkle.proof import (
    MerkleProof,
    verify_non_membership,
    verify_proof,
)
from smtree.merkle.tree_hasher import KEY_SIZE, TREE_DEPTH, TreeHasher, get_bit
from smtree.schemas.errors import InvalidValueException, StoreException
from smtree.store.base import NodeStoreProtocol
from smtree.store.factory import create_store


logger = logging.getLogger(__name__)

NODE_RECORD_SIZE = 2 * KEY_SIZE
VALUE_INDEX_PREFIX = b"\x02"


def value_index_key(path: bytes) -> bytes:
    """Store key of the value index entry for ``path``."""
    return VALUE_INDEX_PREFIX + path


class SparseMerkleTree:
    """
    A sparse Merkle tree backed by a node store.

    Args:
        store: Node store holding node records and the value index
        hasher: TreeHasher (default: SHA-256, 32-byte keys)
        root: Root of a previously built tree to reopen; defaults to the
            empty digest

    Example:
        >>> tree = SparseMerkleTree(InMemoryNodeStore())
        >>> tree.update(bytes([1] * 32), bytes([2] * 32))
        >>> proof = tree.generate_proof(bytes([1] * 32))
        >>> tree.verify_proof(bytes([1] * 32), bytes([2] * 32), proof)
        True
    """

    def __init__(
        self,
        store: NodeStoreProtocol,
        hasher: Optional[TreeHasher] = None,
        root: Optional[bytes] = None,
    ) -> None:
        self.store = store
        self.hasher = hasher or TreeHasher()
        if root is not None and len(root) != KEY_SIZE:
            raise ValueError(f"Root must be {KEY_SIZE} bytes, got {len(root)}")
        self._root = bytes(root) if root is not None else self.hasher.empty_digest()
        logger.info(
            f"Opened sparse Merkle tree on {store!r} with root {to_hex(self._root)}"
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[RuntimeConfig] = None,
        store: Optional[NodeStoreProtocol] = None,
        root: Optional[bytes] = None,
    ) -> "SparseMerkleTree":
        """Build a tree from RuntimeConfig (default: environment config)."""
        config = config or get_default_config()
        hasher = TreeHasher(
            get_hash_function(config.hash.algorithm),
            hash_keys=config.tree.hash_keys,
        )
        if store is None:
            store = create_store(config.store)
        return cls(store, hasher=hasher, root=root)

    def __repr__(self) -> str:
        return f"SparseMerkleTree(root={to_hex(self._root)}, store={self.store!r})"

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def root(self) -> bytes:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self.hasher.is_empty(self._root)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _read_node(self, digest: bytes) -> tuple[bytes, bytes]:
        """Children of an internal node; a missing record reads as (empty, empty)."""
        record = self.store.get(digest)
        if record is None:
            empty = self.hasher.empty_digest()
            return empty, empty
        if len(record) != NODE_RECORD_SIZE:
            raise StoreException(
                f"Corrupt node record: expected {NODE_RECORD_SIZE} bytes, got {len(record)}",
                operation="get",
                key=to_hex(digest),
            )
        return record[:KEY_SIZE], record[KEY_SIZE:]

    def _walk(self, path: bytes) -> list[bytes]:
        """
        Collect side nodes from the root toward ``path``.

        Stops at the first empty subtree on the path; everything below it
        is empty as well.
        """
        side_nodes: list[bytes] = []
        current = self._root
        for depth in range(TREE_DEPTH):
            if self.hasher.is_empty(current):
                break
            left, right = self._read_node(current)
            if get_bit(path, depth) == 0:
                side_nodes.append(right)
                current = left
            else:
                side_nodes.append(left)
                current = right
        return side_nodes

    def _fold(
        self,
        path: bytes,
        leaf: bytes,
        side_nodes: list[bytes],
    ) -> tuple[bytes, list[tuple[bytes, bytes]]]:
        """
        Recompute the path from ``leaf`` to the root.

        Returns:
            (new_root, node records to persist)
        """
        empty = self.hasher.empty_digest()
        records: list[tuple[bytes, bytes]] = []
        current = leaf
        for depth in range(TREE_DEPTH - 1, -1, -1):
            sibling = side_nodes[depth] if depth < len(side_nodes) else empty
            if get_bit(path, depth) == 0:
                left, right = current, sibling
            else:
                left, right = sibling, current
            current = self.hasher.parent_digest(left, right)
            if not self.hasher.is_empty(current):
                records.append((current, left + right))
        return current, records

    def _write_records(self, records: list[tuple[bytes, bytes]]) -> None:
        for digest, children in records:
            self.store.set(digest, children)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def update(self, key: bytes, value: bytes) -> None:
        """
        Set ``key`` to ``value``.

        Raises:
            InvalidKeyException: If the key cannot be mapped to a path
            InvalidValueException: If the value is not bytes
            StoreException: If the node store fails (root left unchanged)
        """
        path = self.hasher.key_path(key)
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidValueException(
                f"Value must be bytes, got {type(value).__name__}",
            )
        value = bytes(value)

        side_nodes = self._walk(path)
        leaf = self.hasher.digest_leaf(path, value)
        new_root, records = self._fold(path, leaf, side_nodes)

        self._write_records(records)
        self.store.set(value_index_key(path), value)
        self._root = new_root
        logger.debug(
            f"Updated key {short_hex(path)}: root is now {to_hex(new_root)}"
        )

    def get(self, key: bytes) -> Optional[bytes]:
        """
        Return the value stored for ``key``, or None.

        Served from the value index without walking the tree.
        """
        if self.is_empty:
            return None
        path = self.hasher.key_path(key)
        return self.store.get(value_index_key(path))

    def has(self, key: bytes) -> bool:
        return self.get(key) is not None

    def remove(self, key: bytes) -> None:
        """
        Remove ``key`` from the tree.

        The leaf position is reset to the empty digest and the path is
        recomputed, so every other key keeps a valid proof. Removing the
        last key returns the root to the empty digest; removing an absent
        key leaves the root unchanged.
        """
        path = self.hasher.key_path(key)
        side_nodes = self._walk(path)
        new_root, records = self._fold(path, self.hasher.empty_digest(), side_nodes)

        self._write_records(records)
        self.store.remove(value_index_key(path))
        self._root = new_root
        logger.debug(
            f"Removed key {short_hex(path)}: root is now {to_hex(new_root)}"
        )

    def generate_proof(self, key: bytes) -> MerkleProof:
        """
        Generate a proof for ``key`` against the current root.

        The same proof serves as a membership proof (with the stored value)
        or a non-membership proof (if the key is absent).
        """
        path = self.hasher.key_path(key)
        side_nodes = self._walk(path)
        logger.debug(
            f"Generated proof for key {short_hex(path)} with {len(side_nodes)} side nodes"
        )
        return MerkleProof(side_nodes=tuple(side_nodes))

    def verify_proof(
        self,
        key: bytes,
        value: bytes,
        proof: MerkleProof,
        root: Optional[bytes] = None,
    ) -> bool:
        """Verify a membership proof against ``root`` (default: current root)."""
        return verify_proof(
            key,
            value,
            proof,
            self._root if root is None else root,
            hasher=self.hasher,
        )

    def verify_non_membership(
        self,
        key: bytes,
        proof: MerkleProof,
        root: Optional[bytes] = None,
    ) -> bool:
        """Verify a non-membership proof against ``root`` (default: current root)."""
        return verify_non_membership(
            key,
            proof,
            self._root if root is None else root,
            hasher=self.hasher,
        )


__all__ = [
    "NODE_RECORD_SIZE",
    "VALUE_INDEX_PREFIX",
    "SparseMerkleTree",
    "value_index_key",
]
