"""
Module 03 - Commitment Scheme
Hash commitments to amounts, plus placeholder knowledge and range proofs.

Owner: Protocol/Crypto Engineer
Module ID: M03

Commitment Rules (Hard Contracts):
1. commitment_hash = sha256(amount_le8 || nonce32)
2. knowledge proof = sha256(amount_le8 || fresh_nonce32 || b"knowledge_proof")
3. range proof     = sha256(amount_le8 || min_le8 || max_le8 || b"range_proof")

Verification Notes:
- verify_knowledge and verify_range_proof are FORMAT checks: they accept any
  pair of 64-character strings. They do not bind a proof to a commitment.
- A knowledge proof draws its own nonce, so it cannot be tied back to any
  earlier commitment of the same amount.
- Only open_commitment performs a real check (recompute and compare).
"""
from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import (
    encode_amount,
    from_hex,
    hash_hex,
    is_hex_digest,
    to_hex,
)
from core.crypto.randomness import NONCE_SIZE, RandomSource, generate_nonce, resolve_source
from core.schemas.errors import CryptoException, InvalidAmountException


logger = logging.getLogger(__name__)

KNOWLEDGE_PROOF_TAG = b"knowledge_proof"
RANGE_PROOF_TAG = b"range_proof"


class Commitment(BaseModel):
    """
    A commitment to a hidden amount.

    Attributes:
        commitment_hash: Hex digest of amount_le8 || nonce
        nonce: Hex-encoded 32-byte nonce (the opening secret)
        amount: Always None in committed form
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    commitment_hash: str = Field(..., min_length=64, max_length=64)
    nonce: str = Field(..., min_length=64, max_length=64)
    amount: int | None = Field(default=None, ge=0)


class KnowledgeProof(BaseModel):
    """Serialized knowledge proof record."""

    model_config = ConfigDict(extra="forbid")

    proof_hash: str
    commitment_hash: str
    amount: int = Field(..., ge=0)
    nonce: str


class CommitmentScheme:
    """
    Commitment engine.

    Stateless apart from the random source used for fresh nonces.

    Example:
        >>> scheme = CommitmentScheme()
        >>> c = CommitmentScheme.create_commitment(100, bytes(32))
        >>> scheme.open_commitment(c, 100, c.nonce)
        True
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng

    @property
    def rng(self) -> RandomSource:
        return resolve_source(self._rng)

    def commit(self, amount: int) -> str:
        """
        Commit to an amount under a fresh random nonce.

        Returns:
            64-character commitment hash
        """
        nonce = generate_nonce(self.rng)
        return self.create_commitment(amount, nonce).commitment_hash

    def commit_with_opening(self, amount: int) -> Commitment:
        """Commit to an amount and keep the nonce needed to open it later."""
        return self.create_commitment(amount, generate_nonce(self.rng))

    @staticmethod
    def create_commitment(amount: int, nonce: bytes) -> Commitment:
        """
        Create a commitment with a specific nonce.

        Deterministic: the same (amount, nonce) always yields the same hash.

        Raises:
            InvalidAmountException: If amount is not a u64
            CryptoException: If nonce is not exactly 32 bytes
        """
        if len(nonce) != NONCE_SIZE:
            raise CryptoException(
                f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}",
                details={"expected": NONCE_SIZE, "actual": len(nonce)},
            )
        commitment_hash = hash_hex(encode_amount(amount), nonce)
        return Commitment(
            commitment_hash=commitment_hash,
            nonce=to_hex(nonce),
            amount=None,
        )

    def prove_knowledge(self, amount: int) -> str:
        """
        Produce a knowledge proof for an amount.

        The proof uses its own fresh nonce and is not linked to any commitment.
        """
        nonce = generate_nonce(self.rng)
        return hash_hex(encode_amount(amount), nonce, KNOWLEDGE_PROOF_TAG)

    @staticmethod
    def verify_knowledge(commitment_hash: str, proof: str) -> bool:
        """Format check: both values must be 64 characters long."""
        return is_hex_digest(commitment_hash) and is_hex_digest(proof)

    @staticmethod
    def open_commitment(commitment: Commitment, amount: int, nonce: str) -> bool:
        """
        Open a commitment with a claimed amount and hex nonce.

        Args:
            commitment: The commitment to open
            amount: Claimed amount
            nonce: Hex-encoded 32-byte nonce

        Returns:
            True if the recomputed commitment hash matches

        Raises:
            CryptoException: If nonce is not valid hex or not exactly 32 bytes
        """
        try:
            nonce_bytes = from_hex(nonce, expected_length=NONCE_SIZE)
        except CryptoException as e:
            raise CryptoException(f"Invalid nonce: {e.message}", details=e.details) from e

        expected = CommitmentScheme.create_commitment(amount, nonce_bytes)
        matches = commitment.commitment_hash == expected.commitment_hash
        logger.debug("Opened commitment %s: %s", commitment.commitment_hash[:16], matches)
        return matches

    @staticmethod
    def create_range_proof(amount: int, min_value: int, max_value: int) -> str:
        """
        Create a range proof that min_value <= amount <= max_value.

        Raises:
            InvalidAmountException: If amount is outside the range
        """
        if amount < min_value or amount > max_value:
            raise InvalidAmountException(
                f"Amount {amount} not in range [{min_value}, {max_value}]",
                amount=amount,
                details={"min": min_value, "max": max_value},
            )
        return hash_hex(
            encode_amount(amount),
            encode_amount(min_value),
            encode_amount(max_value),
            RANGE_PROOF_TAG,
        )

    @staticmethod
    def verify_range_proof(
        proof: str,
        commitment_hash: str,
        min_value: int,
        max_value: int,
    ) -> bool:
        """
        Format check: proof and commitment_hash must be 64 characters long.

        The bounds are accepted for interface compatibility and not checked.
        """
        return is_hex_digest(proof) and is_hex_digest(commitment_hash)


__all__ = [
    "KNOWLEDGE_PROOF_TAG",
    "RANGE_PROOF_TAG",
    "Commitment",
    "KnowledgeProof",
    "CommitmentScheme",
]
