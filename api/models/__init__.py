"""API request and response models."""

from api.models.requests import (
    BalanceProofRequest,
    CommitRequest,
    CreateTransactionRequest,
    MerkleVerifyRequest,
    OpenCommitmentRequest,
    RangeProofRequest,
)
from api.models.responses import (
    CommitResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    MerkleProofResponse,
    MerkleTreeResponse,
    MerkleVerifyResponse,
    OpenCommitmentResponse,
    ProofResponse,
    TransactionListResponse,
    TransactionResponse,
    TransactionVerifyResponse,
)

__all__ = [
    "BalanceProofRequest",
    "CommitRequest",
    "CreateTransactionRequest",
    "MerkleVerifyRequest",
    "OpenCommitmentRequest",
    "RangeProofRequest",
    "CommitResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MerkleProofResponse",
    "MerkleTreeResponse",
    "MerkleVerifyResponse",
    "OpenCommitmentResponse",
    "ProofResponse",
    "TransactionListResponse",
    "TransactionResponse",
    "TransactionVerifyResponse",
]
