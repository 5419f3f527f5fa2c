"""
Module 06 - Storage
JSON persistence for transactions and Merkle leaves.
"""
from .store import MERKLE_FILE, TRANSACTIONS_FILE, TransactionStore

__all__ = [
    "MERKLE_FILE",
    "TRANSACTIONS_FILE",
    "TransactionStore",
]
