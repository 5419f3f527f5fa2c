"""
Module 07 - CLI Transaction Commands

Create, verify, list and prove transactions held in the local store.

Usage:
    shielded create-transaction --from alice --to bob --amount 1000 [--shielded]
    shielded verify-transaction --transaction-id <id>
    shielded generate-proof --transaction-id <id>
    shielded list-transactions [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from typing import Any

from core.proofs.zk_proof import ZeroKnowledgeProof
from core.transactions.transaction import ShieldedTransaction
from shielded_cli.config import open_store


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _print_transaction(transaction: ShieldedTransaction, indent: str = "") -> None:
    print(f"{indent}From: {transaction.sender} -> To: {transaction.recipient}")
    print(
        f"{indent}Amount: {transaction.amount}, Fee: {transaction.fee}, "
        f"Type: {transaction.transaction_type.value}"
    )
    print(f"{indent}Status: {transaction.status.value}")
    print(f"{indent}Timestamp: {transaction.timestamp.isoformat()}")


def create_transaction_cmd(args: Namespace) -> int:
    """Handle create-transaction command."""
    store = open_store(args.cli_config)

    if args.shielded:
        transaction = ShieldedTransaction.create_shielded(args.sender, args.recipient, args.amount)
    else:
        transaction = ShieldedTransaction.create_public(args.sender, args.recipient, args.amount)

    leaf_index = store.add_transaction(transaction)

    if args.json:
        print(json.dumps({
            "transaction": transaction.to_dict(),
            "leaf_index": leaf_index,
            "merkle_root": store.merkle_tree.root,
        }, indent=2))
        return EXIT_SUCCESS

    print(f"Created transaction: {transaction.id}")
    print(f"Type: {transaction.transaction_type.value}")
    print(f"Amount: {transaction.amount}")
    print(f"Fee: {transaction.fee}")
    if transaction.is_shielded:
        print(f"Input commitments: {len(transaction.input_commitments)}")
        print(f"Output commitments: {len(transaction.output_commitments)}")
        print(f"Balanced: {'yes' if transaction.is_balanced() else 'no'}")
    print(f"Merkle leaf index: {leaf_index}")
    print("Transaction saved to persistent storage!")
    return EXIT_SUCCESS


def verify_transaction_cmd(args: Namespace) -> int:
    """Handle verify-transaction command."""
    store = open_store(args.cli_config)
    transaction_id = args.transaction_id

    transaction = store.get_transaction(transaction_id)
    is_valid = ShieldedTransaction.verify(transaction_id)

    if args.json:
        result: dict[str, Any] = {
            "transaction_id": transaction_id,
            "stored": transaction is not None,
            "format_valid": is_valid,
        }
        if transaction is not None:
            result["transaction"] = transaction.to_dict()
        print(json.dumps(result, indent=2))
    else:
        if transaction is not None:
            print(f"Transaction {transaction_id} found in persistent storage")
            _print_transaction(transaction)
        else:
            print(f"Transaction {transaction_id} not found in persistent storage")
            print("Checking transaction format only...")
        print(f"Transaction format is {'valid' if is_valid else 'invalid'}")

    return EXIT_SUCCESS if is_valid else EXIT_VERIFICATION_FAILED


def generate_proof_cmd(args: Namespace) -> int:
    """Handle generate-proof command."""
    store = open_store(args.cli_config)
    transaction_id = args.transaction_id

    proof = ZeroKnowledgeProof.generate(transaction_id)

    # A stored shielded transaction also gets a spend proof over its commitments
    spend_proof = None
    transaction = store.get_transaction(transaction_id)
    if transaction is not None and transaction.is_shielded:
        spend_proof = transaction.spend_proof()

    if args.json:
        result: dict[str, Any] = {"transaction_id": transaction_id, "proof": proof}
        if spend_proof is not None:
            result["spend_proof"] = spend_proof.model_dump(mode="json")
            result["spend_proof_valid"] = spend_proof.verify()
        print(json.dumps(result, indent=2))
        return EXIT_SUCCESS

    print(f"Generated ZK proof for transaction: {transaction_id}")
    print(f"Proof: {proof}")
    if spend_proof is not None:
        print(f"Spend proof: {spend_proof}")
        print(f"Spend proof data: {spend_proof.proof_data}")
        print(f"Spend proof verification: {'valid' if spend_proof.verify() else 'invalid'}")
    return EXIT_SUCCESS


def list_transactions_cmd(args: Namespace) -> int:
    """Handle list-transactions command."""
    store = open_store(args.cli_config)
    transactions = store.all_transactions()

    if args.json:
        print(json.dumps([tx.to_dict() for tx in transactions.values()], indent=2))
        return EXIT_SUCCESS

    if not transactions:
        print("No transactions stored yet.")
        return EXIT_SUCCESS

    print("=== All Stored Transactions ===")
    for i, (transaction_id, transaction) in enumerate(transactions.items(), start=1):
        print(f"{i}. Transaction ID: {transaction_id}")
        _print_transaction(transaction, indent="   ")
        print()
    return EXIT_SUCCESS
