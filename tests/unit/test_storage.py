"""
Module 06 - Transaction Store Tests
Tests for core/storage/store.py
"""
import json
import threading
import time

import pytest

from core.merkle.merkle_tree import EMPTY_TREE_ROOT
from core.schemas.errors import (
    SerializationException,
    StorageException,
    TransactionNotFoundException,
)
from core.storage import store as store_module
from core.storage.store import MERKLE_FILE, TRANSACTIONS_FILE, TransactionStore
from core.transactions.transaction import ShieldedTransaction


class TestLoad:
    """Loading from disk."""

    def test_missing_files_mean_empty(self, tmp_path):
        store = TransactionStore.load(tmp_path)
        assert len(store) == 0
        assert store.merkle_leaves() == []
        assert store.merkle_tree.root == EMPTY_TREE_ROOT

    def test_malformed_json(self, tmp_path):
        (tmp_path / TRANSACTIONS_FILE).write_text("{not json")
        with pytest.raises(SerializationException, match="Malformed JSON"):
            TransactionStore.load(tmp_path)

    def test_wrong_shape(self, tmp_path):
        (tmp_path / MERKLE_FILE).write_text(json.dumps({"a": 1}))
        with pytest.raises(SerializationException):
            TransactionStore.load(tmp_path)

    def test_invalid_transaction(self, tmp_path):
        (tmp_path / TRANSACTIONS_FILE).write_text(json.dumps({"x": {"id": "x"}}))
        with pytest.raises(SerializationException, match="Invalid transaction"):
            TransactionStore.load(tmp_path)

    def test_unreadable_file(self, tmp_path):
        (tmp_path / TRANSACTIONS_FILE).mkdir()
        with pytest.raises(StorageException) as exc_info:
            TransactionStore.load(tmp_path)
        assert exc_info.value.retryable


class TestPersistence:
    """add -> reload -> same transactions and same root."""

    def test_add_and_reload(self, tmp_store, rng):
        public = ShieldedTransaction.create_public("alice", "bob", 10, rng)
        shielded = ShieldedTransaction.create_shielded("carol", "dave", 1000, rng)
        assert tmp_store.add_transaction(public) == 0
        assert tmp_store.add_transaction(shielded) == 1

        reloaded = TransactionStore.load(tmp_store.data_dir)
        assert {k: v.to_dict() for k, v in reloaded.all_transactions().items()} == {
            k: v.to_dict() for k, v in tmp_store.all_transactions().items()
        }
        assert reloaded.merkle_leaves() == [public.id, shielded.id]
        assert reloaded.merkle_tree.root == tmp_store.merkle_tree.root
        assert reloaded.rebuild_merkle_tree().root == tmp_store.merkle_tree.root

    def test_file_format(self, tmp_store, rng):
        tx = ShieldedTransaction.create_public("alice", "bob", 10, rng)
        tmp_store.add_transaction(tx)

        transactions = json.loads(tmp_store.transactions_path.read_text())
        assert transactions[tx.id]["from"] == "alice"
        assert json.loads(tmp_store.merkle_path.read_text()) == [tx.id]

    def test_lookup(self, tmp_store, rng):
        tx = ShieldedTransaction.create_public("alice", "bob", 10, rng)
        tmp_store.add_transaction(tx)
        assert tmp_store.get_transaction(tx.id) == tx
        assert tmp_store.require_transaction(tx.id) == tx
        assert tmp_store.leaf_index_of(tx.id) == 0
        assert tmp_store.get_transaction("missing") is None
        assert tmp_store.leaf_index_of("missing") is None

    def test_require_missing(self, tmp_store):
        with pytest.raises(TransactionNotFoundException) as exc_info:
            tmp_store.require_transaction("missing")
        assert exc_info.value.code == "TRANSACTION_NOT_FOUND"

    def test_inclusion_proof_for_stored_id(self, tmp_store, rng):
        ids = []
        for i in range(3):
            tx = ShieldedTransaction.create_public("a", "b", i, rng)
            tmp_store.add_transaction(tx)
            ids.append(tx.id)
        tree = tmp_store.rebuild_merkle_tree()
        assert tree.verify_proof(ids[2], tree.generate_proof(2), 2)

    def test_clear(self, tmp_store, rng):
        tmp_store.add_transaction(ShieldedTransaction.create_public("a", "b", 1, rng))
        tmp_store.clear()
        assert len(tmp_store) == 0
        assert tmp_store.merkle_tree.root == EMPTY_TREE_ROOT

        reloaded = TransactionStore.load(tmp_store.data_dir)
        assert len(reloaded) == 0
        assert reloaded.merkle_leaves() == []

    def test_custom_file_names(self, tmp_path, rng):
        store = TransactionStore.load(tmp_path, transactions_file="tx.json", merkle_file="m.json")
        store.add_transaction(ShieldedTransaction.create_public("a", "b", 1, rng))
        assert (tmp_path / "tx.json").exists()
        assert (tmp_path / "m.json").exists()


class TestWriteFailures:
    """Concurrent writers and failed writes."""

    def test_concurrent_adds_all_persisted(self, tmp_store, rng, monkeypatch):
        original = store_module._write_json

        def slow_write(path, data):
            time.sleep(0.01)
            original(path, data)

        monkeypatch.setattr(store_module, "_write_json", slow_write)

        transactions = [
            ShieldedTransaction.create_public("a", "b", i, rng)
            for i in range(8)
        ]
        threads = [
            threading.Thread(target=tmp_store.add_transaction, args=(tx,))
            for tx in transactions
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        reloaded = TransactionStore.load(tmp_store.data_dir)
        assert len(reloaded) == 8
        assert reloaded.merkle_leaves() == tmp_store.merkle_leaves()
        assert set(reloaded.merkle_leaves()) == {tx.id for tx in transactions}
        assert reloaded.merkle_tree.root == tmp_store.merkle_tree.root

    def test_failed_add_leaves_store_unchanged(self, tmp_store, rng):
        first = ShieldedTransaction.create_public("a", "b", 1, rng)
        tmp_store.add_transaction(first)
        root = tmp_store.merkle_tree.root

        tmp_store.transactions_path.unlink()
        tmp_store.transactions_path.mkdir()

        second = ShieldedTransaction.create_public("a", "b", 2, rng)
        with pytest.raises(StorageException):
            tmp_store.add_transaction(second)

        assert tmp_store.get_transaction(second.id) is None
        assert tmp_store.merkle_leaves() == [first.id]
        assert tmp_store.merkle_tree.leaf_count == 1
        assert tmp_store.merkle_tree.root == root
        assert len(tmp_store) == 1

    def test_failed_write_removes_temp_file(self, tmp_store, rng):
        tmp_store.transactions_path.mkdir()
        with pytest.raises(StorageException):
            tmp_store.add_transaction(ShieldedTransaction.create_public("a", "b", 1, rng))
        assert list(tmp_store.data_dir.glob("*.tmp")) == []

    def test_failed_clear_keeps_transactions(self, tmp_store, rng):
        tx = ShieldedTransaction.create_public("a", "b", 1, rng)
        tmp_store.add_transaction(tx)
        tmp_store.transactions_path.unlink()
        tmp_store.transactions_path.mkdir()

        with pytest.raises(StorageException):
            tmp_store.clear()
        assert tmp_store.get_transaction(tx.id) is not None
        assert tmp_store.merkle_tree.leaf_count == 1
