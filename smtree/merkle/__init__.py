"""
Module 03 - Sparse Merkle Tree and Proofs
Authenticated key-value index with membership/non-membership proofs.

This module provides:
- TreeHasher: domain-separated leaf/node digests and the empty constant
- SparseMerkleTree: the tree engine over a node store
- MerkleProof: immutable proof value object
- verify_proof / verify_non_membership: offline verification

Usage:
    from smtree.merkle import SparseMerkleTree, verify_proof
    from smtree.store import InMemoryNodeStore

    tree = SparseMerkleTree(InMemoryNodeStore())
    tree.update(key, value)
    proof = tree.generate_proof(key)

    # Anyone holding the root can check the proof without the store
    assert verify_proof(key, value, proof, tree.root, hasher=tree.hasher)
"""
from .tree_hasher import (
    KEY_SIZE,
    LEAF_PREFIX,
    NODE_PREFIX,
    TREE_DEPTH,
    TreeHasher,
    get_bit,
)
from .proof import (
    MerkleProof,
    compute_root,
    verify_non_membership,
    verify_proof,
)
from .sparse_merkle_tree import (
    NODE_RECORD_SIZE,
    VALUE_INDEX_PREFIX,
    SparseMerkleTree,
    value_index_key,
)


__all__ = [
    # Hashing
    "KEY_SIZE",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "TREE_DEPTH",
    "TreeHasher",
    "get_bit",
    # Proofs
    "MerkleProof",
    "compute_root",
    "verify_proof",
    "verify_non_membership",
    # Engine
    "NODE_RECORD_SIZE",
    "VALUE_INDEX_PREFIX",
    "SparseMerkleTree",
    "value_index_key",
]
