"""
Module 03 - Tree Hasher
Domain-separated digests for the sparse Merkle tree.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing:   leaf   = H(0x00 || key || value)
2. Node hashing:   node   = H(0x01 || left || right)
3. Empty subtree:  empty  = 32 zero bytes, the same constant at every depth
4. Collapse rule:  parent(empty, empty) = empty

Rule 4 is what makes the root a function of the key/value set alone: a
subtree that holds no keys hashes to the empty constant no matter how tall
it is, so removing the last key under a subtree restores the exact digest
it had before anything was written there.
"""
from __future__ import annotations

from smtree.crypto.hashing import HashFunction, get_hash_function
from smtree.schemas.errors import ConfigurationException, InvalidKeyException


LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"

# Width of the key space in bytes / bits
KEY_SIZE: int = 32
TREE_DEPTH: int = KEY_SIZE * 8


def get_bit(path: bytes, index: int) -> int:
    """
    Return bit ``index`` of ``path`` (0 = left, 1 = right).

    Bits are read most-significant first, byte 0 before byte 1, so bit 0
    selects the child of the root and bit 255 selects the leaf.
    """
    return (path[index // 8] >> (7 - (index % 8))) & 1


class TreeHasher:
    """
    Pure digest functions for the tree, parameterised by a hash function.

    Args:
        hash_function: Fixed-output hash; its digest size must be 32 bytes
        hash_keys: When True, keys of any length are hashed into a 256-bit
            path. When False, keys must already be 32 bytes and are used as
            the path directly.
    """

    def __init__(
        self,
        hash_function: HashFunction | None = None,
        hash_keys: bool = False,
    ) -> None:
        self.hash_function = hash_function or get_hash_function()
        if self.hash_function.digest_size != KEY_SIZE:
            raise ConfigurationException(
                f"Hash output must be {KEY_SIZE} bytes to match the key space, "
                f"{self.hash_function.name} produces {self.hash_function.digest_size}",
                setting="hash.algorithm",
            )
        self.hash_keys = hash_keys
        self._zero_value = bytes(KEY_SIZE)

    def __repr__(self) -> str:
        return f"TreeHasher(hash_function={self.hash_function!r}, hash_keys={self.hash_keys})"

    @property
    def zero_value(self) -> bytes:
        return self._zero_value

    def digest(self, data: bytes) -> bytes:
        return self.hash_function.hash(data)

    def digest_leaf(self, key: bytes, value: bytes) -> bytes:
        """Digest of a leaf: H(0x00 || key || value)."""
        return self.hash_function.hash(LEAF_PREFIX + key + value)

    def digest_node(self, left: bytes, right: bytes) -> bytes:
        """Digest of an internal node: H(0x01 || left || right)."""
        return self.hash_function.hash(NODE_PREFIX + left + right)

    def empty_digest(self) -> bytes:
        """The empty-subtree constant (also the root of an empty tree)."""
        return self._zero_value

    def is_empty(self, digest: bytes) -> bool:
        return digest == self._zero_value

    def parent_digest(self, left: bytes, right: bytes) -> bytes:
        """
        Digest of the parent of ``left`` and ``right``.

        Two empty children produce the empty constant; anything else is
        digest_node(left, right).
        """
        if left == self._zero_value and right == self._zero_value:
            return self._zero_value
        return self.digest_node(left, right)

    def key_path(self, key: bytes) -> bytes:
        """
        Map a caller key to its 256-bit tree path.

        Raises:
            InvalidKeyException: If ``key`` is not bytes, or (without
                key hashing) is not exactly 32 bytes long
        """
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise InvalidKeyException(
                f"Key must be bytes, got {type(key).__name__}",
            )
        key = bytes(key)
        if self.hash_keys:
            return self.digest(key)
        if len(key) != KEY_SIZE:
            raise InvalidKeyException(
                f"Key must be exactly {KEY_SIZE} bytes, got {len(key)}",
                length=len(key),
            )
        return key


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "KEY_SIZE",
    "TREE_DEPTH",
    "get_bit",
    "TreeHasher",
]
