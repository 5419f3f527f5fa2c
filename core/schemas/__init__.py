"""
Module 01 - Schemas & Errors
File: __init__.py

Purpose: Export the public error taxonomy shared by every ledger module.
"""

from .errors import (
    CryptoException,
    ErrorCodes,
    InvalidAmountException,
    InvalidTransactionException,
    LedgerError,
    LedgerException,
    MerkleTreeException,
    SerializationException,
    StorageException,
    TransactionNotFoundException,
)

__all__ = [
    "CryptoException",
    "ErrorCodes",
    "InvalidAmountException",
    "InvalidTransactionException",
    "LedgerError",
    "LedgerException",
    "MerkleTreeException",
    "SerializationException",
    "StorageException",
    "TransactionNotFoundException",
]
