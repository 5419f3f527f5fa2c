"""
Module 08 - Commitment and Proof Routes

Stateless endpoints over the commitment scheme and the balance proof.
"""

from fastapi import APIRouter

from api.errors import InvalidRequestError
from api.models.requests import (
    BalanceProofRequest,
    CommitRequest,
    OpenCommitmentRequest,
    RangeProofRequest,
)
from api.models.responses import CommitResponse, OpenCommitmentResponse, ProofResponse
from core.commitments.commitment import Commitment, CommitmentScheme
from core.proofs.zk_proof import create_balance_proof


router = APIRouter(tags=["commitments"])


@router.post("/commitments", response_model=CommitResponse)
def commit(request: CommitRequest) -> CommitResponse:
    """Commit to an amount and attach a knowledge proof."""
    scheme = CommitmentScheme()
    commitment_hash = scheme.commit(request.amount)
    proof = scheme.prove_knowledge(request.amount)
    return CommitResponse(
        commitment=commitment_hash,
        knowledge_proof=proof,
        valid=scheme.verify_knowledge(commitment_hash, proof),
    )


@router.post("/commitments/open", response_model=OpenCommitmentResponse)
def open_commitment(request: OpenCommitmentRequest) -> OpenCommitmentResponse:
    """Check an opening. A malformed nonce answers 400."""
    # nonce is checked by open_commitment, which raises a crypto error when malformed
    commitment = Commitment.model_construct(
        commitment_hash=request.commitment_hash, nonce=request.nonce, amount=None
    )
    valid = CommitmentScheme.open_commitment(commitment, request.amount, request.nonce)
    return OpenCommitmentResponse(valid=valid)


@router.post("/proofs/range", response_model=ProofResponse)
def range_proof(request: RangeProofRequest) -> ProofResponse:
    if request.min_value > request.max_value:
        raise InvalidRequestError(
            "min must not exceed max",
            details={"min": request.min_value, "max": request.max_value},
        )
    proof = CommitmentScheme.create_range_proof(
        request.amount, request.min_value, request.max_value
    )
    return ProofResponse(proof=proof)


@router.post("/proofs/balance", response_model=ProofResponse)
def balance_proof(request: BalanceProofRequest) -> ProofResponse:
    proof = create_balance_proof(request.input_total, request.output_total, request.fee)
    return ProofResponse(proof=proof)
