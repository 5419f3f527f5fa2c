"""
Module 05 - Balance Conservation
Fee schedule and the input = output + fee invariant.
"""
from __future__ import annotations

from core.crypto.hashing import MAX_AMOUNT
from core.proofs.zk_proof import create_balance_proof
from core.schemas.errors import InvalidAmountException


# 0.1% of the amount, never less than this
MIN_FEE: int = 1
FEE_DIVISOR: int = 1000


def calculate_fee(amount: int) -> int:
    """
    Fee for a transfer: max(1, amount // 1000).

    >>> calculate_fee(999), calculate_fee(1000), calculate_fee(2500)
    (1, 1, 2)
    """
    return max(MIN_FEE, amount // FEE_DIVISOR)


def check_input_total(amount: int, fee: int) -> int:
    """
    Return amount + fee, the total a shielded spend must consume.

    Raises:
        InvalidAmountException: If the total does not fit in a u64
    """
    total = amount + fee
    if total > MAX_AMOUNT:
        raise InvalidAmountException(
            f"Amount {amount} plus fee {fee} overflows an unsigned 64-bit integer",
            amount=amount,
            details={"fee": fee},
        )
    return total


def is_conserved(input_total: int, output_total: int, fee: int) -> bool:
    """True if input_total == output_total + fee."""
    return input_total == output_total + fee


__all__ = [
    "MIN_FEE",
    "FEE_DIVISOR",
    "calculate_fee",
    "check_input_total",
    "is_conserved",
    "create_balance_proof",
]
