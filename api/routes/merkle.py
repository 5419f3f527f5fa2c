"""
Module 08 - Merkle Routes

Snapshot the shared accumulator, hand out inclusion proofs and check them.
"""

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.models.requests import MerkleVerifyRequest
from api.models.responses import (
    MerkleProofResponse,
    MerkleTreeResponse,
    MerkleVerifyResponse,
)
from core.merkle.merkle_tree import build_merkle_proof
from core.storage.store import TransactionStore


router = APIRouter(prefix="/merkle", tags=["merkle"])


@router.get("", response_model=MerkleTreeResponse)
def get_tree(store: TransactionStore = Depends(get_store)) -> MerkleTreeResponse:
    tree = store.merkle_tree.snapshot()
    return MerkleTreeResponse(**tree.model_dump())


@router.get("/proof/{leaf_index}", response_model=MerkleProofResponse)
def get_proof(
    leaf_index: int,
    store: TransactionStore = Depends(get_store),
) -> MerkleProofResponse:
    """Inclusion proof for one leaf. Out-of-range indexes answer 400."""
    tree = store.merkle_tree.snapshot()
    proof = build_merkle_proof(tree.leaves, leaf_index)
    return MerkleProofResponse(leaf_index=leaf_index, proof=proof, root=tree.root)


@router.post("/verify", response_model=MerkleVerifyResponse)
def verify_proof(
    request: MerkleVerifyRequest,
    store: TransactionStore = Depends(get_store),
) -> MerkleVerifyResponse:
    accumulator = store.merkle_tree
    valid = accumulator.verify_proof(request.leaf_data, request.proof, request.leaf_index)
    return MerkleVerifyResponse(valid=valid, root=accumulator.root)
