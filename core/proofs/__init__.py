"""
Module 04 - Proofs
Placeholder zero-knowledge proofs (hash attestations, structural checks).
"""
from .zk_proof import (
    BALANCE_PROOF_TAG,
    PROOF_DATA_TAG,
    SPEND_PROOF_TAG,
    ZK_PROOF_TAG,
    ProofType,
    ZeroKnowledgeProof,
    create_balance_proof,
    split_proof_string,
)

__all__ = [
    "BALANCE_PROOF_TAG",
    "PROOF_DATA_TAG",
    "SPEND_PROOF_TAG",
    "ZK_PROOF_TAG",
    "ProofType",
    "ZeroKnowledgeProof",
    "create_balance_proof",
    "split_proof_string",
]
