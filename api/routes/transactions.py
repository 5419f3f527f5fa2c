"""
Module 08 - Transaction Routes

Create, list, fetch and verify transactions in the shared store.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.models.requests import CreateTransactionRequest
from api.models.responses import (
    TransactionListResponse,
    TransactionResponse,
    TransactionVerifyResponse,
)
from core.storage.store import TransactionStore
from core.transactions.transaction import ShieldedTransaction


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionResponse)
def create_transaction(
    request: CreateTransactionRequest,
    store: TransactionStore = Depends(get_store),
) -> TransactionResponse:
    """Create a public or shielded transaction and append its id to the Merkle tree."""
    if request.shielded:
        transaction = ShieldedTransaction.create_shielded(
            request.sender, request.recipient, request.amount
        )
    else:
        transaction = ShieldedTransaction.create_public(
            request.sender, request.recipient, request.amount
        )

    leaf_index = store.add_transaction(transaction)
    return TransactionResponse(
        transaction=transaction.to_dict(),
        leaf_index=leaf_index,
        merkle_root=store.merkle_tree.root,
    )


@router.get("", response_model=TransactionListResponse)
def list_transactions(store: TransactionStore = Depends(get_store)) -> TransactionListResponse:
    transactions = store.all_transactions()
    return TransactionListResponse(
        count=len(transactions),
        transactions=[tx.to_dict() for tx in transactions.values()],
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    store: TransactionStore = Depends(get_store),
) -> TransactionResponse:
    """Fetch one stored transaction; unknown ids answer 404."""
    transaction = store.require_transaction(transaction_id)
    return TransactionResponse(
        transaction=transaction.to_dict(),
        leaf_index=store.leaf_index_of(transaction_id),
        merkle_root=store.merkle_tree.root,
    )


@router.get("/{transaction_id}/verify", response_model=TransactionVerifyResponse)
def verify_transaction(
    transaction_id: str,
    store: TransactionStore = Depends(get_store),
) -> TransactionVerifyResponse:
    format_valid = ShieldedTransaction.verify(transaction_id)
    return TransactionVerifyResponse(
        ok=format_valid,
        transaction_id=transaction_id,
        format_valid=format_valid,
        stored=store.get_transaction(transaction_id) is not None,
    )
