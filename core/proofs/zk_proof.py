"""
Module 04 - Zero-Knowledge Proof Placeholders
Hash-tagged proof strings for transactions, spends and balances.

Owner: Protocol/Crypto Engineer
Module ID: M04

None of these proofs carry soundness or hiding guarantees. They are hash
attestations with fixed domain tags, and verify() is a structural check.

Proof Rules (Hard Contracts):
1. proof_id     = sha256(tx_id || b"zk_proof" || nonce32)[:16].hex()
2. proof_data   = sha256(tx_id || b"proof_data" || nonce32').hex()
3. spend proof  = sha256(inputs... || outputs... || balance_proof || b"spend_proof")
4. balance proof = sha256(input_le8 || output_le8 || fee_le8 || b"balance_proof")
   and exists only when input_total == output_total + fee
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import encode_amount, hash_hex, hash_parts, to_hex
from core.crypto.randomness import RandomSource, generate_nonce
from core.schemas.errors import InvalidTransactionException


logger = logging.getLogger(__name__)

ZK_PROOF_TAG = b"zk_proof"
PROOF_DATA_TAG = b"proof_data"
SPEND_PROOF_TAG = b"spend_proof"
BALANCE_PROOF_TAG = b"balance_proof"

# Bytes of the proof-id digest that are kept
PROOF_ID_BYTES = 16


class ProofType(str, Enum):
    """Kinds of placeholder proof."""

    SPEND_PROOF = "SpendProof"
    OUTPUT_PROOF = "OutputProof"
    BALANCE_PROOF = "BalanceProof"
    RANGE_PROOF = "RangeProof"


def create_balance_proof(input_total: int, output_total: int, fee: int) -> str:
    """
    Create a balance proof showing input_total == output_total + fee.

    Raises:
        InvalidTransactionException: If the totals do not balance
        InvalidAmountException: If any value is not a u64
    """
    if input_total != output_total + fee:
        raise InvalidTransactionException(
            "Input total does not equal output total plus fee",
            details={
                "input_total": input_total,
                "output_total": output_total,
                "fee": fee,
            },
        )
    return hash_hex(
        encode_amount(input_total),
        encode_amount(output_total),
        encode_amount(fee),
        BALANCE_PROOF_TAG,
    )


class ZeroKnowledgeProof(BaseModel):
    """
    Structured placeholder proof attached to a transaction.

    Attributes:
        proof_id: 32 hex chars (truncated digest)
        transaction_id: Transaction this proof is for
        proof_data: 64 hex chars
        public_inputs: Public statements, e.g. "input_count:1"
        timestamp: Creation time (UTC)
        proof_type: Kind of proof
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    proof_id: str
    transaction_id: str
    proof_data: str
    public_inputs: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    proof_type: ProofType

    @staticmethod
    def generate(transaction_id: str, rng: RandomSource | None = None) -> str:
        """
        Generate the compact proof string stored on a shielded transaction.

        Returns:
            "<proof_id>:<proof_data>"
        """
        proof_id = ZeroKnowledgeProof._generate_proof_id(transaction_id, rng)
        proof_data = hash_hex(transaction_id, PROOF_DATA_TAG, generate_nonce(rng))
        return f"{proof_id}:{proof_data}"

    @classmethod
    def create_spend_proof(
        cls,
        transaction_id: str,
        input_commitments: Sequence[str],
        output_commitments: Sequence[str],
        balance_proof: str,
        rng: RandomSource | None = None,
    ) -> "ZeroKnowledgeProof":
        """Create a spend proof over a transaction's commitment sets."""
        proof_data = hash_hex(
            *input_commitments,
            *output_commitments,
            balance_proof,
            SPEND_PROOF_TAG,
        )
        proof = cls(
            proof_id=cls._generate_proof_id(transaction_id, rng),
            transaction_id=transaction_id,
            proof_data=proof_data,
            public_inputs=[
                f"input_count:{len(input_commitments)}",
                f"output_count:{len(output_commitments)}",
            ],
            proof_type=ProofType.SPEND_PROOF,
        )
        logger.debug("Created spend proof %s for %s", proof.proof_id, transaction_id[:16])
        return proof

    def verify(self) -> bool:
        """Structural check only."""
        return len(self.proof_data) >= 64 and len(self.proof_id) >= 32

    @staticmethod
    def _generate_proof_id(transaction_id: str, rng: RandomSource | None) -> str:
        digest = hash_parts(transaction_id, ZK_PROOF_TAG, generate_nonce(rng))
        return to_hex(digest[:PROOF_ID_BYTES])

    def __str__(self) -> str:
        return (
            f"ZKProof({self.proof_id}, type: {self.proof_type.value}, "
            f"timestamp: {self.timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')})"
        )


def split_proof_string(proof: str) -> tuple[str, str]:
    """
    Split a compact "<proof_id>:<proof_data>" string.

    Raises:
        ValueError: If the string has no separator
    """
    proof_id, sep, proof_data = proof.partition(":")
    if not sep:
        raise ValueError("Proof string must have the form '<proof_id>:<proof_data>'")
    return proof_id, proof_data


__all__ = [
    "ZK_PROOF_TAG",
    "PROOF_DATA_TAG",
    "SPEND_PROOF_TAG",
    "BALANCE_PROOF_TAG",
    "ProofType",
    "ZeroKnowledgeProof",
    "create_balance_proof",
    "split_proof_string",
]
