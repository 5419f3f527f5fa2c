"""
Module 05 - Transactions
Balance-conserving construction of public and shielded transactions.

Usage:
    from core.transactions import ShieldedTransaction

    tx = ShieldedTransaction.create_shielded("alice", "bob", 1000)
    assert tx.fee == 1
    assert len(tx.output_commitments) == 2
    assert tx.is_balanced()
"""
from .balance import (
    FEE_DIVISOR,
    MIN_FEE,
    calculate_fee,
    check_input_total,
    create_balance_proof,
    is_conserved,
)
from .transaction import (
    MIN_TRANSACTION_ID_LENGTH,
    ShieldedTransaction,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "FEE_DIVISOR",
    "MIN_FEE",
    "calculate_fee",
    "check_input_total",
    "create_balance_proof",
    "is_conserved",
    "MIN_TRANSACTION_ID_LENGTH",
    "ShieldedTransaction",
    "TransactionStatus",
    "TransactionType",
]
