"""
Module 01 - Schemas
File: proof.py

Purpose: Wire schema for sparse Merkle proofs.
Side nodes travel as 0x-prefixed hex strings; their count and order are
preserved exactly because verification aligns them with key bits by
position.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smtree.crypto.hashing import from_hex, to_hex
from smtree.merkle.proof import MerkleProof
from smtree.merkle.tree_hasher import KEY_SIZE, TREE_DEPTH


class MerkleProofModel(BaseModel):
    """Transport form of a MerkleProof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    side_nodes: list[str] = Field(
        default_factory=list,
        description="Sibling digests, root-adjacent level first (0x-hex, 32 bytes each)",
        max_length=TREE_DEPTH,
    )

    @field_validator("side_nodes")
    @classmethod
    def _check_side_nodes(cls, v: list[str]) -> list[str]:
        for depth, node in enumerate(v):
            raw = from_hex(node)
            if len(raw) != KEY_SIZE:
                raise ValueError(
                    f"side node at depth {depth} is {len(raw)} bytes, expected {KEY_SIZE}"
                )
        return v

    @classmethod
    def from_proof(cls, proof: MerkleProof) -> "MerkleProofModel":
        return cls(side_nodes=[to_hex(n) for n in proof.side_nodes])

    def to_proof(self) -> MerkleProof:
        return MerkleProof(side_nodes=tuple(from_hex(n) for n in self.side_nodes))


class ProofBundle(BaseModel):
    """
    A self-contained claim: key, value (or absence) and proof against a root.

    This is what the CLI writes and reads; a verifier needs nothing else
    beyond the hash algorithm name.
    """

    model_config = ConfigDict(extra="forbid")

    algorithm: str = Field(default="sha256", description="Tree hash algorithm")
    hash_keys: bool = Field(default=False, description="Whether keys were hashed into paths")
    root: str = Field(..., description="Root the proof was generated against (0x-hex)")
    key: str = Field(..., description="Caller key (0x-hex)")
    value: str | None = Field(
        default=None,
        description="Value (0x-hex); None for a non-membership proof",
    )
    proof: MerkleProofModel

    @property
    def is_membership(self) -> bool:
        return self.value is not None
