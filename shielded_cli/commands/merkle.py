"""
Module 07 - CLI Merkle Commands

Inspect the Merkle accumulator built from stored transaction ids.

Usage:
    shielded show-merkle-tree [--json]
    shielded merkle-proof --index 2 [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.schemas.errors import MerkleTreeException
from shielded_cli.config import open_store


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def show_merkle_tree_cmd(args: Namespace) -> int:
    """Handle show-merkle-tree command."""
    store = open_store(args.cli_config)
    tree = store.rebuild_merkle_tree().snapshot()
    transactions = store.all_transactions()

    if args.json:
        print(json.dumps({
            **tree.model_dump(mode="json"),
            "transaction_count": len(transactions),
        }, indent=2))
        return EXIT_SUCCESS

    print("=== Merkle Tree State ===")
    print(f"Merkle Tree Root: {tree.root}")
    print(f"Tree Height: {tree.height}")
    print(f"Number of leaves: {tree.leaf_count}")
    print(f"Total transactions stored: {len(transactions)}")

    if transactions:
        print("\n=== Stored Transactions ===")
        for transaction_id, transaction in transactions.items():
            print(f"ID: {transaction_id}")
            print(f"  From: {transaction.sender} -> To: {transaction.recipient}")
            print(f"  Amount: {transaction.amount}, Type: {transaction.transaction_type.value}")
            print(f"  Status: {transaction.status.value}")
            print()
    return EXIT_SUCCESS


def merkle_proof_cmd(args: Namespace) -> int:
    """Handle merkle-proof command: prove and check inclusion of one leaf."""
    store = open_store(args.cli_config)
    tree = store.rebuild_merkle_tree()
    leaves = store.merkle_leaves()

    try:
        proof = tree.generate_proof(args.index)
    except MerkleTreeException as e:
        print(f"Error: {e.message} (index {args.index}, {tree.leaf_count} leaves)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf_data = leaves[args.index]
    valid = tree.verify_proof(leaf_data, proof, args.index)

    if args.json:
        print(json.dumps({
            "leaf_index": args.index,
            "leaf_data": leaf_data,
            "proof": proof,
            "root": tree.root,
            "valid": valid,
        }, indent=2))
    else:
        print(f"Leaf {args.index}: {leaf_data}")
        print(f"Merkle Tree Root: {tree.root}")
        print(f"Proof ({len(proof)} siblings):")
        for sibling in proof:
            print(f"  {sibling}")
        print(f"Inclusion proof is {'valid' if valid else 'invalid'}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
