"""
Module 02 - Hashing Utilities
Pluggable hash functions and hex helpers for tree commitments.

This module provides:
- HashFunction: the one-method hashing capability injected into the tree
- HashlibHash: HashFunction backed by a hashlib constructor
- get_hash_function: lookup of the supported algorithms by name
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- All operations are deterministic
- Only fixed-output algorithms are registered; blake2b is pinned to 32 bytes
"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Callable

from smtree.schemas.errors import ConfigurationException


DEFAULT_HASH_ALGORITHM = "sha256"


class HashFunction(ABC):
    """
    A fixed-output cryptographic hash function.

    The tree is generic over this capability: it is resolved once when the
    tree is constructed and never changes afterwards.
    """

    name: str = ""
    digest_size: int = 0

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """Hash ``data`` and return exactly ``digest_size`` bytes."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, digest_size={self.digest_size})"


class HashlibHash(HashFunction):
    """HashFunction backed by a hashlib constructor."""

    def __init__(self, name: str, factory: Callable[[], "hashlib._Hash"]) -> None:
        self.name = name
        self._factory = factory
        self.digest_size = factory().digest_size

    def hash(self, data: bytes) -> bytes:
        h = self._factory()
        h.update(data)
        return h.digest()


_ALGORITHMS: dict[str, Callable[[], "hashlib._Hash"]] = {
    "sha256": hashlib.sha256,
    "sha3_256": hashlib.sha3_256,
    "blake2b": lambda: hashlib.blake2b(digest_size=32),
    "blake2s": hashlib.blake2s,
}


def available_algorithms() -> list[str]:
    """Names accepted by get_hash_function(), sorted."""
    return sorted(_ALGORITHMS)


def get_hash_function(name: str = DEFAULT_HASH_ALGORITHM) -> HashFunction:
    """
    Resolve a hash algorithm by name.

    Args:
        name: One of available_algorithms() (case-insensitive, '-' allowed)

    Returns:
        A HashFunction instance

    Raises:
        ConfigurationException: If the algorithm is not supported
    """
    key = name.lower().replace("-", "_")
    factory = _ALGORITHMS.get(key)
    if factory is None:
        raise ConfigurationException(
            f"Unsupported hash algorithm: {name!r}",
            setting="hash.algorithm",
            details={"available": available_algorithms()},
        )
    return HashlibHash(key, factory)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def short_hex(data: bytes, length: int = 8) -> str:
    """0x-prefixed hex of the first ``length`` bytes, for log lines."""
    return "0x" + data[:length].hex()


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
