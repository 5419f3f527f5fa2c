"""
Core cryptographic utilities.

Module 02 provides the hash primitive and explicit random sources.
"""
from .hashing import (
    DIGEST_SIZE,
    HEX_DIGEST_LENGTH,
    MAX_AMOUNT,
    sha256,
    hash_parts,
    hash_hex,
    encode_amount,
    to_hex,
    from_hex,
    is_hex_digest,
)
from .randomness import (
    NONCE_SIZE,
    RandomSource,
    SecureRandomSource,
    DeterministicRandomSource,
    get_default_source,
    set_default_source,
    generate_nonce,
    generate_unique_id,
)

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
    "NONCE_SIZE",
    "RandomSource",
    "SecureRandomSource",
    "DeterministicRandomSource",
    "get_default_source",
    "set_default_source",
    "generate_nonce",
    "generate_unique_id",
]
