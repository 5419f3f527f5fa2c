"""
Module 02 - Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- sha256 / hash_parts agreement with hashlib
- amount encoding (8-byte little-endian, u64 bounds)
- to_hex/from_hex round trip and error handling
"""
import hashlib

import pytest

from core.crypto.hashing import (
    MAX_AMOUNT,
    encode_amount,
    from_hex,
    hash_hex,
    hash_parts,
    is_hex_digest,
    sha256,
    to_hex,
)
from core.schemas.errors import CryptoException, InvalidAmountException


class TestSha256:
    """Tests for sha256() and hash_parts()."""

    def test_sha256_known_value(self):
        """sha256 of b"hello" matches the published digest."""
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_hash_parts_is_concatenation(self):
        """Parts are hashed as one byte string with no separators."""
        assert hash_parts(b"ab", b"cd") == hashlib.sha256(b"abcd").digest()

    def test_str_parts_are_utf8(self):
        assert hash_parts("leaf:", b"L0") == hash_parts(b"leaf:L0")
        assert hash_parts("é") == hashlib.sha256("é".encode("utf-8")).digest()

    def test_hash_hex_is_lowercase_64(self):
        digest = hash_hex(b"anything")
        assert len(digest) == 64
        assert digest == digest.lower()
        assert is_hex_digest(digest)


class TestEncodeAmount:
    """Tests for encode_amount()."""

    def test_little_endian(self):
        assert encode_amount(100).hex() == "6400000000000000"
        assert encode_amount(1).hex() == "0100000000000000"

    def test_bounds(self):
        assert encode_amount(0) == bytes(8)
        assert encode_amount(MAX_AMOUNT) == b"\xff" * 8

    def test_negative_rejected(self):
        with pytest.raises(InvalidAmountException):
            encode_amount(-1)

    def test_overflow_rejected(self):
        with pytest.raises(InvalidAmountException) as exc_info:
            encode_amount(MAX_AMOUNT + 1)
        assert exc_info.value.code == "INVALID_AMOUNT"

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidAmountException):
            encode_amount(1.5)
        with pytest.raises(InvalidAmountException):
            encode_amount(True)


class TestHexConversion:
    """Tests for to_hex() and from_hex()."""

    def test_round_trip(self):
        data = bytes(range(32))
        assert from_hex(to_hex(data)) == data

    def test_no_prefix(self):
        assert to_hex(b"\xde\xad") == "dead"

    def test_invalid_hex_raises(self):
        with pytest.raises(CryptoException):
            from_hex("zz")

    def test_expected_length(self):
        with pytest.raises(CryptoException, match="Expected 32 bytes"):
            from_hex("00" * 31, expected_length=32)
        assert from_hex("00" * 32, expected_length=32) == bytes(32)

    def test_is_hex_digest_is_length_only(self):
        assert is_hex_digest("x" * 64)
        assert not is_hex_digest("a" * 63)
        assert not is_hex_digest(None)
