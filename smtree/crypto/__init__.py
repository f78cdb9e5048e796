"""
Core cryptographic utilities.

Module 02 provides the pluggable hash functions used by the tree hasher.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    HashlibHash,
    available_algorithms,
    get_hash_function,
    sha256,
    to_hex,
    from_hex,
    short_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HashFunction",
    "HashlibHash",
    "available_algorithms",
    "get_hash_function",
    "sha256",
    "to_hex",
    "from_hex",
    "short_hex",
]
