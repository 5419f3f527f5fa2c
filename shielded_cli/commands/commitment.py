"""
Module 07 - CLI Commitment Demo

Commit to an amount, prove knowledge of it, open it, and range-check it.

Usage:
    shielded demonstrate-commitment --amount 1000 [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from core.commitments.commitment import CommitmentScheme
from core.crypto.hashing import MAX_AMOUNT


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def demonstrate_commitment_cmd(args: Namespace) -> int:
    """Handle demonstrate-commitment command."""
    scheme = CommitmentScheme()
    amount = args.amount

    commitment = scheme.commit_with_opening(amount)
    proof = scheme.prove_knowledge(amount)
    knowledge_ok = scheme.verify_knowledge(commitment.commitment_hash, proof)
    opened = scheme.open_commitment(commitment, amount, commitment.nonce)
    range_proof = scheme.create_range_proof(amount, 0, MAX_AMOUNT)
    range_ok = scheme.verify_range_proof(range_proof, commitment.commitment_hash, 0, MAX_AMOUNT)

    ok = knowledge_ok and opened and range_ok

    if args.json:
        print(json.dumps({
            "amount": amount,
            "commitment": commitment.commitment_hash,
            "nonce": commitment.nonce,
            "knowledge_proof": proof,
            "knowledge_proof_valid": knowledge_ok,
            "opened": opened,
            "range_proof": range_proof,
            "range_proof_valid": range_ok,
        }, indent=2))
    else:
        print(f"Commitment for amount {amount}: {commitment.commitment_hash}")
        print(f"Knowledge proof: {proof}")
        print(f"Proof verification: {'valid' if knowledge_ok else 'invalid'}")
        print(f"Opening with nonce {commitment.nonce}: {'matches' if opened else 'does not match'}")
        print(f"Range proof [0, 2^64-1]: {range_proof}")
        print(f"Range proof verification: {'valid' if range_ok else 'invalid'}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
