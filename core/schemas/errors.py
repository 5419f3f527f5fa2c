"""
Module 01 - Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy across the shielded ledger.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the ledger."""

    LEDGER_ERROR = "LEDGER_ERROR"

    # Amount & Balance Errors
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_TRANSACTION = "INVALID_TRANSACTION"

    # Merkle & Commitment Errors
    MERKLE_TREE_ERROR = "MERKLE_TREE_ERROR"
    COMMITMENT_ERROR = "COMMITMENT_ERROR"
    ZK_PROOF_ERROR = "ZK_PROOF_ERROR"

    # Cryptographic Errors
    CRYPTO_ERROR = "CRYPTO_ERROR"

    # Persistence Errors
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class LedgerError(BaseModel):
    """
    Base error model for structured error communication.

    Used where errors cross a process boundary (API responses, CLI --json
    output) and must be serialized rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_AMOUNT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "LedgerException":
        """Convert this error model to a raised exception."""
        return LedgerException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class LedgerException(Exception):
    """
    Base exception for all shielded ledger errors.

    Carries structured error information and can be converted to/from
    LedgerError models.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.LEDGER_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> LedgerError:
        """Convert this exception to a LedgerError model."""
        return LedgerError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidAmountException(LedgerException):
    """Raised when an amount is outside its allowed range."""

    def __init__(
        self,
        message: str,
        amount: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if amount is not None:
            full_details["amount"] = amount
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_AMOUNT,
            details=full_details,
        )


class InvalidTransactionException(LedgerException):
    """Raised when a transaction's totals do not conserve value."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_TRANSACTION,
            details=details,
        )


class MerkleTreeException(LedgerException):
    """Raised when a Merkle tree operation cannot be performed."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_TREE_ERROR,
            details=full_details,
        )


class CryptoException(LedgerException):
    """Raised on malformed cryptographic input (bad hex, wrong-length nonce)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CRYPTO_ERROR,
            details=details,
        )


class SerializationException(LedgerException):
    """Raised when a record cannot be serialized or parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SERIALIZATION_ERROR,
            details=details,
        )


class StorageException(LedgerException):
    """Raised when the transaction store cannot read or write its files."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.STORAGE_ERROR,
            details=full_details,
            retryable=True,
        )


class TransactionNotFoundException(LedgerException):
    """Raised when a transaction id is not present in the store."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            message=f"Transaction not found: {transaction_id}",
            code=ErrorCodes.TRANSACTION_NOT_FOUND,
            details={"transaction_id": transaction_id},
        )
