"""
Module 02 - Merkle Accumulator Tests
Tests for core/merkle/accumulator.py
"""
import threading

import pytest
from pydantic import ValidationError

from core.merkle.accumulator import MerkleAccumulator, MerkleTree
from core.merkle.merkle_tree import EMPTY_TREE_ROOT, build_merkle_root, hash_leaf
from core.schemas.errors import MerkleTreeException


class TestAccumulatorState:
    """Root, height and leaf count move together."""

    def test_empty(self):
        acc = MerkleAccumulator()
        assert acc.root == EMPTY_TREE_ROOT
        assert acc.height == 0
        assert acc.leaf_count == 0
        assert len(acc) == 0

    def test_single_leaf(self):
        acc = MerkleAccumulator()
        acc.add_leaf("L0")
        assert acc.root == hash_leaf("L0")
        assert acc.height == 0
        assert acc.leaf_count == 1

    def test_root_matches_batch_build(self, accumulator):
        expected = build_merkle_root([hash_leaf(f"L{i}") for i in range(5)])
        assert accumulator.root == expected
        assert accumulator.height == 3
        assert accumulator.leaf_count == 5

    def test_root_changes_on_append(self, accumulator):
        before = accumulator.root
        accumulator.add_leaf("L5")
        assert accumulator.root != before
        assert accumulator.leaf_count == 6

    def test_leaves_returns_copy(self, accumulator):
        leaves = accumulator.leaves
        leaves.append("x")
        assert accumulator.leaf_count == 5
        assert len(accumulator.leaves) == 5

    def test_duplicate_data_allowed(self):
        acc = MerkleAccumulator.from_leaf_data(["same", "same"])
        assert acc.leaf_count == 2


class TestAccumulatorProofs:
    """Proof generation and verification against the live root."""

    def test_every_leaf_verifies(self, accumulator):
        for i in range(accumulator.leaf_count):
            proof = accumulator.generate_proof(i)
            assert accumulator.verify_proof(f"L{i}", proof, i)

    def test_out_of_bounds(self, accumulator):
        with pytest.raises(MerkleTreeException):
            accumulator.generate_proof(5)

    def test_stale_proof_fails_after_append(self, accumulator):
        proof = accumulator.generate_proof(4)
        accumulator.add_leaf("L5")
        assert not accumulator.verify_proof("L4", proof, 4)
        assert accumulator.verify_proof("L4", accumulator.generate_proof(4), 4)

    def test_bad_index_returns_false(self, accumulator):
        proof = accumulator.generate_proof(0)
        assert not accumulator.verify_proof("L0", proof, 99)


class TestSnapshot:
    """Tests for the MerkleTree snapshot."""

    def test_round_trip(self, accumulator):
        tree = accumulator.snapshot()
        restored = MerkleAccumulator.from_snapshot(MerkleTree.model_validate(tree.model_dump()))
        assert restored.root == accumulator.root
        assert restored.leaves == accumulator.leaves
        assert restored.verify_proof("L2", accumulator.generate_proof(2), 2)

    def test_inconsistent_snapshot_rejected(self, accumulator):
        data = accumulator.snapshot().model_dump()
        data["root"] = "f" * 64
        with pytest.raises(ValidationError):
            MerkleTree.model_validate(data)

    def test_wrong_leaf_count_rejected(self, accumulator):
        data = accumulator.snapshot().model_dump()
        data["leaf_count"] = 4
        with pytest.raises(ValidationError):
            MerkleTree.model_validate(data)


class TestConcurrency:
    """Concurrent appends keep root and leaf count consistent."""

    @pytest.mark.slow
    def test_concurrent_add_leaf(self):
        acc = MerkleAccumulator()
        per_thread = 25

        def worker(tid: int):
            for i in range(per_thread):
                acc.add_leaf(f"t{tid}-{i}")

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snapshot = acc.snapshot()
        assert snapshot.leaf_count == 4 * per_thread
        assert snapshot.root == build_merkle_root(snapshot.leaves)
