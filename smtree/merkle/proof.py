"""
Module 03 - Merkle Proofs
Sparse Merkle proof value object and offline verification.

This module provides:
- MerkleProof: immutable ordered list of side nodes
- compute_root: replay a proof from a starting digest up to the root
- verify_proof: membership check for (key, value) against a root
- verify_non_membership: absence check for key against a root

Proof layout:
- side_nodes[d] is the sibling at depth d (d = 0 is the child level of
  the root, d = 255 is the leaf level)
- A proof shorter than 256 entries was truncated by the prover at the
  first empty subtree on the path; the missing deeper siblings are the
  empty digest

Verification needs only the proof and a TreeHasher, never a node store.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence

from smtree.crypto.hashing import from_hex, to_hex
from smtree.merkle.tree_hasher import KEY_SIZE, TREE_DEPTH, TreeHasher, get_bit
from smtree.schemas.errors import InvalidKeyException, InvalidProofException


@dataclass(frozen=True)
class MerkleProof:
    """
    A sparse Merkle proof for one key.

    Attributes:
        side_nodes: Sibling digests ordered from the root-adjacent level
            (index 0) downwards; at most 256 entries of 32 bytes each
    """
    side_nodes: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        """Normalise to a tuple and validate proof structure."""
        nodes = tuple(bytes(n) for n in self.side_nodes)
        object.__setattr__(self, "side_nodes", nodes)

        if len(nodes) > TREE_DEPTH:
            raise InvalidProofException(
                f"Proof has {len(nodes)} side nodes, at most {TREE_DEPTH} allowed",
            )
        for depth, node in enumerate(nodes):
            if len(node) != KEY_SIZE:
                raise InvalidProofException(
                    f"Side node at depth {depth} is {len(node)} bytes, expected {KEY_SIZE}",
                    depth=depth,
                )

    def __len__(self) -> int:
        return len(self.side_nodes)

    @property
    def depth(self) -> int:
        """Number of levels actually recorded by the prover."""
        return len(self.side_nodes)

    def to_dict(self) -> dict[str, Any]:
        return {"side_nodes": [to_hex(n) for n in self.side_nodes]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Build a proof from its wire dictionary.

        Raises:
            InvalidProofException: If the dictionary is malformed
        """
        if not isinstance(data, dict) or "side_nodes" not in data:
            raise InvalidProofException("Proof must be an object with 'side_nodes'")
        raw = data["side_nodes"]
        if not isinstance(raw, list):
            raise InvalidProofException("'side_nodes' must be a list")
        nodes: list[bytes] = []
        for depth, item in enumerate(raw):
            try:
                nodes.append(from_hex(item))
            except (TypeError, ValueError, AttributeError) as e:
                raise InvalidProofException(
                    f"Side node at depth {depth} is not valid hex: {e}",
                    depth=depth,
                ) from e
        return cls(side_nodes=tuple(nodes))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "MerkleProof":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidProofException(f"Proof is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _as_side_nodes(proof: MerkleProof | Sequence[bytes]) -> tuple[bytes, ...] | None:
    """Side nodes of a proof or raw list, or None if structurally invalid."""
    if isinstance(proof, MerkleProof):
        return proof.side_nodes
    try:
        return MerkleProof(side_nodes=tuple(proof)).side_nodes
    except (InvalidProofException, TypeError):
        return None


def compute_root(
    path: bytes,
    start: bytes,
    side_nodes: Sequence[bytes],
    hasher: TreeHasher,
) -> bytes:
    """
    Fold ``start`` up to the root along ``path`` using ``side_nodes``.

    Depths beyond len(side_nodes) use the empty digest as sibling.

    Args:
        path: 32-byte tree path of the key
        start: Digest at the leaf position (leaf digest or empty digest)
        side_nodes: Siblings ordered root-adjacent first
        hasher: TreeHasher used to build the tree

    Returns:
        The recomputed root digest
    """
    empty = hasher.empty_digest()
    current = start
    for depth in range(TREE_DEPTH - 1, -1, -1):
        sibling = side_nodes[depth] if depth < len(side_nodes) else empty
        if get_bit(path, depth) == 0:
            current = hasher.parent_digest(current, sibling)
        else:
            current = hasher.parent_digest(sibling, current)
    return current


def verify_proof(
    key: bytes,
    value: bytes,
    proof: MerkleProof | Sequence[bytes],
    root: bytes,
    hasher: TreeHasher | None = None,
) -> bool:
    """
    Verify that ``key`` maps to ``value`` under ``root``.

    A structurally invalid proof, an unmappable key or a value that is not
    bytes verifies False; it never raises.

    Args:
        key: Caller key (mapped to a path via hasher.key_path)
        value: Claimed value bytes
        proof: MerkleProof or raw list of side nodes
        root: Claimed root digest
        hasher: TreeHasher the tree was built with (default: SHA-256)

    Returns:
        True if the recomputed root equals ``root``
    """
    hasher = hasher or TreeHasher()
    side_nodes = _as_side_nodes(proof)
    if side_nodes is None:
        return False
    if not isinstance(value, (bytes, bytearray, memoryview)):
        return False
    try:
        path = hasher.key_path(key)
    except InvalidKeyException:
        return False
    leaf = hasher.digest_leaf(path, bytes(value))
    return compute_root(path, leaf, side_nodes, hasher) == root


def verify_non_membership(
    key: bytes,
    proof: MerkleProof | Sequence[bytes],
    root: bytes,
    hasher: TreeHasher | None = None,
) -> bool:
    """
    Verify that no value is stored for ``key`` under ``root``.

    The leaf position is replayed as the empty digest; the proof is valid
    iff that reproduces ``root``.
    """
    hasher = hasher or TreeHasher()
    side_nodes = _as_side_nodes(proof)
    if side_nodes is None:
        return False
    try:
        path = hasher.key_path(key)
    except InvalidKeyException:
        return False
    return compute_root(path, hasher.empty_digest(), side_nodes, hasher) == root


__all__ = [
    "MerkleProof",
    "compute_root",
    "verify_proof",
    "verify_non_membership",
]
