"""
Module 02 - Hashing Unit Tests
Tests for smtree/crypto/hashing.py

Tests:
- sha256 stability
- hash function registry (names, digest sizes, unknown names)
- to_hex/from_hex conversions and their error cases
"""
import hashlib
import pytest

from smtree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    available_algorithms,
    get_hash_function,
    sha256,
    to_hex,
    from_hex,
    short_hex,
)
from smtree.schemas.errors import ConfigurationException


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestHashFunctionRegistry:
    """Tests for get_hash_function() and the built-in algorithms."""

    def test_default_is_sha256(self):
        h = get_hash_function()

        assert DEFAULT_HASH_ALGORITHM == "sha256"
        assert h.name == "sha256"
        assert h.hash(b"abc") == hashlib.sha256(b"abc").digest()

    @pytest.mark.parametrize("name", ["sha256", "sha3_256", "blake2b", "blake2s"])
    def test_builtin_algorithms_are_32_bytes(self, name):
        h = get_hash_function(name)

        assert isinstance(h, HashFunction)
        assert h.digest_size == 32
        assert len(h.hash(b"data")) == 32

    def test_blake2b_pinned_to_32_bytes(self):
        h = get_hash_function("blake2b")

        assert h.hash(b"x") == hashlib.blake2b(b"x", digest_size=32).digest()

    def test_name_is_normalised(self):
        assert get_hash_function("SHA3-256").name == "sha3_256"

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            get_hash_function("md5")

        assert exc_info.value.details["setting"] == "hash.algorithm"
        assert "sha256" in exc_info.value.details["available"]

    def test_available_algorithms_sorted(self):
        names = available_algorithms()

        assert names == sorted(names)
        assert "sha256" in names

    def test_algorithms_differ(self):
        digests = {get_hash_function(n).hash(b"same input") for n in available_algorithms()}

        assert len(digests) == len(available_algorithms())


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_format(self):
        result = to_hex(bytes.fromhex("deadbeef"))

        assert result == "0xdeadbeef"
        assert result.startswith("0x")

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_valid(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_empty(self):
        assert from_hex("0x") == b""

    def test_from_hex_missing_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzzzz")

    def test_hex_round_trip_sha256(self):
        digest = sha256(b"test")

        assert from_hex(to_hex(digest)) == digest

    def test_short_hex_truncates(self):
        assert short_hex(bytes(range(32))) == "0x0001020304050607"
        assert short_hex(b"\xff", length=4) == "0xff"
