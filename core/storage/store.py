"""
Module 06 - Transaction Store
File: store.py

Purpose: Persist transactions and Merkle leaves as JSON files on disk.

Files (inside data_dir):
- transactions.json: {transaction_id: transaction}
- merkle_tree.json:  [transaction_id, ...] in insertion order

The store is a shell around the core: it keeps a live MerkleAccumulator fed
with every recorded transaction id, and can rebuild one from the saved leaves.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.merkle.accumulator import MerkleAccumulator
from core.schemas.errors import (
    SerializationException,
    StorageException,
    TransactionNotFoundException,
)
from core.transactions.transaction import ShieldedTransaction


logger = logging.getLogger(__name__)


# File name constants
TRANSACTIONS_FILE = "transactions.json"
MERKLE_FILE = "merkle_tree.json"


def _read_json(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageException(f"Failed to read {path.name}: {e}", path=str(path)) from e
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SerializationException(
            f"Malformed JSON in {path.name}: {e}",
            details={"path": str(path)},
        ) from e


def _write_json(path: Path, data: Any) -> None:
    """Write JSON atomically (temp file in the same directory, then rename)."""
    content = json.dumps(data, indent=2)
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        raise StorageException(f"Failed to write {path.name}: {e}", path=str(path)) from e
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)


class TransactionStore:
    """
    JSON-file backed store of transactions and Merkle leaves.

    Example:
        >>> store = TransactionStore.load("./data")
        >>> store.add_transaction(ShieldedTransaction.create_public("a", "b", 10))
        >>> store.merkle_tree.leaf_count
        1
    """

    def __init__(
        self,
        data_dir: str | Path = ".",
        transactions_file: str = TRANSACTIONS_FILE,
        merkle_file: str = MERKLE_FILE,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.transactions_path = self.data_dir / transactions_file
        self.merkle_path = self.data_dir / merkle_file
        self._transactions: dict[str, ShieldedTransaction] = {}
        self._merkle_leaves: list[str] = []
        self._accumulator = MerkleAccumulator()
        self._lock = threading.RLock()

    @classmethod
    def load(
        cls,
        data_dir: str | Path = ".",
        transactions_file: str = TRANSACTIONS_FILE,
        merkle_file: str = MERKLE_FILE,
    ) -> "TransactionStore":
        """
        Load a store from disk. Missing files mean an empty store.

        Raises:
            StorageException: If a file exists but cannot be read
            SerializationException: If a file holds malformed data
        """
        store = cls(data_dir, transactions_file, merkle_file)

        if store.transactions_path.exists():
            raw = _read_json(store.transactions_path)
            if not isinstance(raw, dict):
                raise SerializationException(
                    f"{store.transactions_path.name} must hold a JSON object",
                    details={"path": str(store.transactions_path)},
                )
            try:
                store._transactions = {
                    tx_id: ShieldedTransaction.model_validate(tx_data)
                    for tx_id, tx_data in raw.items()
                }
            except ValidationError as e:
                raise SerializationException(
                    f"Invalid transaction in {store.transactions_path.name}",
                    details={"errors": [err["msg"] for err in e.errors()]},
                ) from e

        if store.merkle_path.exists():
            leaves = _read_json(store.merkle_path)
            if not isinstance(leaves, list) or not all(isinstance(x, str) for x in leaves):
                raise SerializationException(
                    f"{store.merkle_path.name} must hold a JSON list of strings",
                    details={"path": str(store.merkle_path)},
                )
            store._merkle_leaves = leaves

        store._accumulator = MerkleAccumulator.from_leaf_data(store._merkle_leaves)
        logger.info(
            "Loaded %d transactions and %d Merkle leaves from %s",
            len(store._transactions),
            len(store._merkle_leaves),
            store.data_dir,
        )
        return store

    def _persist(
        self,
        transactions: dict[str, ShieldedTransaction],
        leaves: list[str],
    ) -> None:
        # Caller holds self._lock.
        _write_json(
            self.transactions_path,
            {tx_id: tx.to_dict() for tx_id, tx in transactions.items()},
        )
        _write_json(self.merkle_path, leaves)
        logger.debug("Saved %d transactions to %s", len(transactions), self.data_dir)

    def save(self) -> None:
        """Write both files."""
        with self._lock:
            self._persist(self._transactions, self._merkle_leaves)

    def add_transaction(self, transaction: ShieldedTransaction) -> int:
        """
        Record a transaction, append its id to the Merkle tree, and save.

        Memory is only updated once both files are written.

        Returns:
            The Merkle leaf index assigned to the transaction id

        Raises:
            StorageException: If the write fails; the store is left unchanged
        """
        with self._lock:
            transactions = {**self._transactions, transaction.id: transaction}
            leaves = self._merkle_leaves + [transaction.id]
            self._persist(transactions, leaves)
            self._transactions = transactions
            self._merkle_leaves = leaves
            self._accumulator.add_leaf(transaction.id)
            leaf_index = len(leaves) - 1
        logger.info("Stored transaction %s at leaf %d", transaction.id, leaf_index)
        return leaf_index

    def get_transaction(self, transaction_id: str) -> ShieldedTransaction | None:
        with self._lock:
            return self._transactions.get(transaction_id)

    def require_transaction(self, transaction_id: str) -> ShieldedTransaction:
        """
        Get a transaction or raise.

        Raises:
            TransactionNotFoundException: If the id is unknown
        """
        transaction = self.get_transaction(transaction_id)
        if transaction is None:
            raise TransactionNotFoundException(transaction_id)
        return transaction

    def all_transactions(self) -> dict[str, ShieldedTransaction]:
        with self._lock:
            return dict(self._transactions)

    def merkle_leaves(self) -> list[str]:
        with self._lock:
            return list(self._merkle_leaves)

    def leaf_index_of(self, transaction_id: str) -> int | None:
        """Position of a transaction id among the Merkle leaves."""
        with self._lock:
            try:
                return self._merkle_leaves.index(transaction_id)
            except ValueError:
                return None

    @property
    def merkle_tree(self) -> MerkleAccumulator:
        """The live accumulator kept in step with add_transaction."""
        return self._accumulator

    def rebuild_merkle_tree(self) -> MerkleAccumulator:
        """Build a fresh accumulator from the stored leaves."""
        return MerkleAccumulator.from_leaf_data(self.merkle_leaves())

    def clear(self) -> None:
        """Drop every transaction and leaf, then save the empty state."""
        with self._lock:
            self._persist({}, [])
            self._transactions = {}
            self._merkle_leaves = []
            self._accumulator = MerkleAccumulator()
        logger.info("Cleared transaction store at %s", self.data_dir)

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)
