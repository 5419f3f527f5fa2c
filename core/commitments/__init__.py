"""
Module 03 - Commitments
Hash commitments to hidden amounts.

This module provides:
- Commitment: committed form of an amount (hash + nonce, amount hidden)
- KnowledgeProof: serialized knowledge proof record
- CommitmentScheme: commit / open / prove / verify operations

Usage:
    from core.commitments import CommitmentScheme
    from core.crypto import DeterministicRandomSource

    scheme = CommitmentScheme(rng=DeterministicRandomSource(seed=7))
    commitment = scheme.commit_with_opening(1000)
    assert scheme.open_commitment(commitment, 1000, commitment.nonce)
"""
from .commitment import (
    KNOWLEDGE_PROOF_TAG,
    RANGE_PROOF_TAG,
    Commitment,
    CommitmentScheme,
    KnowledgeProof,
)

__all__ = [
    "KNOWLEDGE_PROOF_TAG",
    "RANGE_PROOF_TAG",
    "Commitment",
    "CommitmentScheme",
    "KnowledgeProof",
]
