"""
Module 05 - Shielded Transactions
Transaction records and the balance-conserving transaction builder.

Owner: Protocol Engineer
Module ID: M05

Construction Rules (Hard Contracts):
1. id        = sha256(from || to || amount_le8 || nonce32 || uuid4_bytes)
2. fee       = max(1, amount // 1000)
3. signature = sha256(id || from || nonce32)
4. Shielded: one input commitment over amount + fee, one output commitment
   over amount, plus a change commitment over 0 whenever fee > 0
5. Public: no commitments, no proof

Balance Notes:
- is_balanced() compares the declared totals, amount + fee against
  amount + fee. It is true for every transaction this module builds and does
  not look at the commitments, whose amounts are hidden.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.commitments.commitment import CommitmentScheme
from core.crypto.hashing import MAX_AMOUNT, encode_amount, hash_hex
from core.crypto.randomness import RandomSource, generate_nonce, generate_unique_id
from core.proofs.zk_proof import ZeroKnowledgeProof
from core.schemas.errors import SerializationException
from core.transactions.balance import (
    calculate_fee,
    check_input_total,
    create_balance_proof,
    is_conserved,
)


logger = logging.getLogger(__name__)

# Shortest string accepted by ShieldedTransaction.verify
MIN_TRANSACTION_ID_LENGTH = 32


class TransactionType(str, Enum):
    """Visibility of a transaction's amounts."""

    PUBLIC = "Public"
    SHIELDED = "Shielded"


class TransactionStatus(str, Enum):
    """Lifecycle status of a transaction."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    FAILED = "Failed"


class ShieldedTransaction(BaseModel):
    """
    A public or shielded transfer.

    Immutable once built. Serialized field names follow the ledger's wire
    format: "from" and "to" map to the sender and recipient attributes.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(..., min_length=1)
    sender: str = Field(..., alias="from")
    recipient: str = Field(..., alias="to")
    amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    fee: int = Field(..., ge=0, le=MAX_AMOUNT)
    transaction_type: TransactionType
    input_commitments: list[str] = Field(default_factory=list)
    output_commitments: list[str] = Field(default_factory=list)
    zk_proof: str | None = Field(default=None)
    signature: str
    timestamp: datetime
    status: TransactionStatus = Field(default=TransactionStatus.PENDING)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create_public(
        cls,
        sender: str,
        recipient: str,
        amount: int,
        rng: RandomSource | None = None,
    ) -> "ShieldedTransaction":
        """
        Create a public transaction (visible amount, no commitments).

        Raises:
            InvalidAmountException: If amount or amount + fee is not a u64
        """
        transaction_id = cls.generate_transaction_id(sender, recipient, amount, rng)
        fee = calculate_fee(amount)
        check_input_total(amount, fee)
        signature = cls.generate_signature(transaction_id, sender, rng)

        transaction = cls(
            id=transaction_id,
            sender=sender,
            recipient=recipient,
            amount=amount,
            fee=fee,
            transaction_type=TransactionType.PUBLIC,
            signature=signature,
            timestamp=datetime.now(timezone.utc),
        )
        logger.info("Created public transaction %s", transaction_id)
        return transaction

    @classmethod
    def create_shielded(
        cls,
        sender: str,
        recipient: str,
        amount: int,
        rng: RandomSource | None = None,
    ) -> "ShieldedTransaction":
        """
        Create a shielded transaction (amounts hidden behind commitments).

        Raises:
            InvalidAmountException: If amount or amount + fee is not a u64
        """
        transaction_id = cls.generate_transaction_id(sender, recipient, amount, rng)
        fee = calculate_fee(amount)
        scheme = CommitmentScheme(rng)

        input_commitments = [scheme.commit(check_input_total(amount, fee))]
        output_commitments = [scheme.commit(amount)]
        if fee > 0:
            # change goes back to the sender
            output_commitments.append(scheme.commit(0))

        zk_proof = ZeroKnowledgeProof.generate(transaction_id, rng)
        signature = cls.generate_signature(transaction_id, sender, rng)

        transaction = cls(
            id=transaction_id,
            sender=sender,
            recipient=recipient,
            amount=amount,
            fee=fee,
            transaction_type=TransactionType.SHIELDED,
            input_commitments=input_commitments,
            output_commitments=output_commitments,
            zk_proof=zk_proof,
            signature=signature,
            timestamp=datetime.now(timezone.utc),
        )
        logger.info(
            "Created shielded transaction %s (%d inputs, %d outputs)",
            transaction_id,
            len(input_commitments),
            len(output_commitments),
        )
        return transaction

    @staticmethod
    def generate_transaction_id(
        sender: str,
        recipient: str,
        amount: int,
        rng: RandomSource | None = None,
    ) -> str:
        """Derive a fresh transaction id; two calls never return the same id."""
        return hash_hex(
            sender,
            recipient,
            encode_amount(amount),
            generate_nonce(rng),
            generate_unique_id(rng),
        )

    @staticmethod
    def generate_signature(
        transaction_id: str,
        signer: str,
        rng: RandomSource | None = None,
    ) -> str:
        """Placeholder signature: sha256(id || signer || nonce)."""
        return hash_hex(transaction_id, signer, generate_nonce(rng))

    # -------------------------------------------------------------------------
    # Verification & balance
    # -------------------------------------------------------------------------

    @staticmethod
    def verify(transaction_id: str) -> bool:
        """Format check: the id must be at least 32 characters long."""
        return len(transaction_id) >= MIN_TRANSACTION_ID_LENGTH

    @staticmethod
    def calculate_fee(amount: int) -> int:
        return calculate_fee(amount)

    def input_total(self) -> int:
        """Total consumed by the transaction (amount + fee)."""
        return self.amount + self.fee

    def output_total(self) -> int:
        """Total delivered to the recipient."""
        return self.amount

    def is_balanced(self) -> bool:
        """Check declared totals: input_total == output_total + fee."""
        return is_conserved(self.input_total(), self.output_total(), self.fee)

    def balance_proof(self) -> str:
        """Balance proof over the declared totals."""
        return create_balance_proof(self.input_total(), self.output_total(), self.fee)

    def spend_proof(self, rng: RandomSource | None = None) -> ZeroKnowledgeProof:
        """Spend proof binding the commitment sets to the balance proof."""
        return ZeroKnowledgeProof.create_spend_proof(
            self.id,
            self.input_commitments,
            self.output_commitments,
            self.balance_proof(),
            rng,
        )

    @property
    def is_shielded(self) -> bool:
        return self.transaction_type == TransactionType.SHIELDED

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Pretty JSON for storage or transmission."""
        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def from_json(cls, data: str) -> "ShieldedTransaction":
        """
        Parse a transaction from JSON.

        Raises:
            SerializationException: If the JSON is malformed or invalid
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise SerializationException(
                f"Invalid transaction JSON: {e.error_count()} validation error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def __str__(self) -> str:
        return (
            f"Transaction({self.id}, {self.sender} -> {self.recipient}, "
            f"amount: {self.amount}, type: {self.transaction_type.value}, "
            f"status: {self.status.value})"
        )


__all__ = [
    "MIN_TRANSACTION_ID_LENGTH",
    "TransactionType",
    "TransactionStatus",
    "ShieldedTransaction",
]
