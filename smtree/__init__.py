"""
smtree - authenticated key-value index.

A sparse Merkle tree over a 256-bit key space with membership and
non-membership proofs, generic over the hash function and node store.
"""

from smtree.merkle import (
    MerkleProof,
    SparseMerkleTree,
    TreeHasher,
    verify_non_membership,
    verify_proof,
)
from smtree.store import FileNodeStore, InMemoryNodeStore

__version__ = "0.1.0"

__all__ = [
    "MerkleProof",
    "SparseMerkleTree",
    "TreeHasher",
    "verify_non_membership",
    "verify_proof",
    "FileNodeStore",
    "InMemoryNodeStore",
]
