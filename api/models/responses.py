"""
Module 08 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "shielded-ledger-api"
    version: str = "v1"


class TransactionResponse(BaseModel):
    """Response for POST /transactions and GET /transactions/{id}."""

    ok: bool = True
    transaction: dict[str, Any] = Field(..., description="Transaction in wire format")
    leaf_index: int | None = Field(default=None, description="Merkle leaf index of the id")
    merkle_root: str | None = Field(default=None, description="Root after the append")


class TransactionListResponse(BaseModel):
    """Response for GET /transactions."""

    ok: bool = True
    count: int
    transactions: list[dict[str, Any]] = Field(default_factory=list)


class TransactionVerifyResponse(BaseModel):
    """Response for GET /transactions/{id}/verify."""

    ok: bool = Field(..., description="Whether the id passes the format check")
    transaction_id: str
    format_valid: bool
    stored: bool


class MerkleTreeResponse(BaseModel):
    """Response for GET /merkle."""

    root: str
    height: int
    leaf_count: int
    leaves: list[str] = Field(default_factory=list)


class MerkleProofResponse(BaseModel):
    """Response for GET /merkle/proof/{leaf_index}."""

    leaf_index: int
    proof: list[str]
    root: str


class MerkleVerifyResponse(BaseModel):
    """Response for POST /merkle/verify."""

    valid: bool
    root: str


class CommitResponse(BaseModel):
    """Response for POST /commitments."""

    commitment: str
    knowledge_proof: str
    valid: bool


class OpenCommitmentResponse(BaseModel):
    """Response for POST /commitments/open."""

    valid: bool


class ProofResponse(BaseModel):
    """Response for the /proofs endpoints."""

    proof: str


class ErrorDetail(BaseModel):
    """Error detail information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
