"""
Module 02 - Hashing Utilities
Hash primitive shared by commitments, proofs and the Merkle accumulator.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Multi-part hashing (concatenation without separators)
- Amount encoding (8-byte little-endian u64)
- Plain lowercase hex encoding/decoding

Encoding Rules (Hard Contracts):
1. Digests are 32 bytes, hex-encoded as 64 lowercase characters
2. Amounts are u64, serialized as 8-byte little-endian before hashing
3. Domain tags are ASCII byte literals appended with no separators
4. str parts are hashed as their UTF-8 bytes
"""
from __future__ import annotations

import hashlib
import struct

from core.schemas.errors import CryptoException, InvalidAmountException


# Digest size of the hash primitive
DIGEST_SIZE: int = 32

# Length of a hex-encoded digest
HEX_DIGEST_LENGTH: int = DIGEST_SIZE * 2

# Largest amount representable as u64
MAX_AMOUNT: int = 2**64 - 1

_U64_LE = struct.Struct("<Q")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_parts(*parts: bytes | str) -> bytes:
    """
    Hash the concatenation of several parts.

    Equivalent to feeding each part to the same hasher in order.
    str parts are UTF-8 encoded.

    Args:
        *parts: Byte strings or text to hash, in order

    Returns:
        32-byte SHA-256 digest
    """
    hasher = hashlib.sha256()
    for part in parts:
        if isinstance(part, str):
            part = part.encode("utf-8")
        hasher.update(part)
    return hasher.digest()


def hash_hex(*parts: bytes | str) -> str:
    """Hash the concatenation of parts and return the lowercase hex digest."""
    return to_hex(hash_parts(*parts))


def encode_amount(amount: int) -> bytes:
    """
    Encode an amount as 8-byte little-endian.

    Args:
        amount: Unsigned 64-bit amount

    Returns:
        8 bytes

    Raises:
        InvalidAmountException: If amount is not an int in [0, 2**64 - 1]

    Example:
        >>> encode_amount(100).hex()
        '6400000000000000'
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountException(
            f"Amount must be an integer, got {type(amount).__name__}"
        )
    if amount < 0 or amount > MAX_AMOUNT:
        raise InvalidAmountException(
            f"Amount {amount} does not fit in an unsigned 64-bit integer",
            amount=amount,
        )
    return _U64_LE.pack(amount)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string (no prefix).

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str, expected_length: int | None = None) -> bytes:
    """
    Convert a hex string to bytes.

    Args:
        hex_string: Hex string, without prefix
        expected_length: If given, the exact number of decoded bytes required

    Returns:
        Decoded bytes

    Raises:
        CryptoException: If the string is not valid hex or decodes to the
                         wrong number of bytes
    """
    try:
        data = bytes.fromhex(hex_string)
    except (TypeError, ValueError) as e:
        raise CryptoException(
            f"Invalid hex string: {e}",
            details={"length": len(hex_string) if isinstance(hex_string, str) else None},
        ) from e

    if expected_length is not None and len(data) != expected_length:
        raise CryptoException(
            f"Expected {expected_length} bytes, got {len(data)}",
            details={"expected": expected_length, "actual": len(data)},
        )
    return data


def is_hex_digest(value: str) -> bool:
    """True if value has the length of a hex-encoded digest."""
    return isinstance(value, str) and len(value) == HEX_DIGEST_LENGTH


__all__ = [
    "DIGEST_SIZE",
    "HEX_DIGEST_LENGTH",
    "MAX_AMOUNT",
    "sha256",
    "hash_parts",
    "hash_hex",
    "encode_amount",
    "to_hex",
    "from_hex",
    "is_hex_digest",
]
