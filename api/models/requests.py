"""
Module 08 - API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import MAX_AMOUNT


class CreateTransactionRequest(BaseModel):
    """Request body for POST /transactions endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(..., alias="from", min_length=1, description="Sender address")
    recipient: str = Field(..., alias="to", min_length=1, description="Recipient address")
    amount: int = Field(..., ge=0, le=MAX_AMOUNT, description="Amount to transfer")
    shielded: bool = Field(
        default=False,
        description="Hide the amount behind commitments",
    )


class MerkleVerifyRequest(BaseModel):
    """Request body for POST /merkle/verify endpoint."""

    leaf_data: str = Field(..., description="Raw leaf data (a transaction id)")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, bottom up")
    leaf_index: int = Field(..., description="Position of the leaf")


class CommitRequest(BaseModel):
    """Request body for POST /commitments endpoint."""

    amount: int = Field(..., ge=0, le=MAX_AMOUNT)


class OpenCommitmentRequest(BaseModel):
    """Request body for POST /commitments/open endpoint."""

    commitment_hash: str = Field(..., min_length=64, max_length=64, description="Hex commitment to check")
    amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    nonce: str = Field(..., description="Hex-encoded 32-byte nonce")


class RangeProofRequest(BaseModel):
    """Request body for POST /proofs/range endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    min_value: int = Field(..., alias="min", ge=0, le=MAX_AMOUNT)
    max_value: int = Field(..., alias="max", ge=0, le=MAX_AMOUNT)


class BalanceProofRequest(BaseModel):
    """Request body for POST /proofs/balance endpoint."""

    input_total: int = Field(..., ge=0, le=MAX_AMOUNT)
    output_total: int = Field(..., ge=0, le=MAX_AMOUNT)
    fee: int = Field(..., ge=0, le=MAX_AMOUNT)
