"""
Module 04 - Placeholder Proof Tests
Tests for core/proofs/zk_proof.py
"""
import pytest

from core.crypto.hashing import encode_amount, hash_hex
from core.proofs.zk_proof import (
    ProofType,
    ZeroKnowledgeProof,
    create_balance_proof,
    split_proof_string,
)
from core.schemas.errors import InvalidAmountException, InvalidTransactionException


class TestBalanceProof:
    """Tests for create_balance_proof()."""

    def test_balanced(self):
        proof = create_balance_proof(1001, 1000, 1)
        assert proof == hash_hex(
            encode_amount(1001), encode_amount(1000), encode_amount(1), b"balance_proof"
        )

    def test_unbalanced_raises(self):
        with pytest.raises(InvalidTransactionException) as exc_info:
            create_balance_proof(1001, 1000, 2)
        assert exc_info.value.code == "INVALID_TRANSACTION"
        assert exc_info.value.details["fee"] == 2

    def test_negative_values_rejected(self):
        with pytest.raises(InvalidAmountException):
            create_balance_proof(0, 1, -1)


class TestGenerate:
    """Tests for the compact proof string."""

    def test_shape(self, rng):
        proof = ZeroKnowledgeProof.generate("tx" * 32, rng)
        proof_id, proof_data = split_proof_string(proof)
        assert len(proof_id) == 32
        assert len(proof_data) == 64

    def test_fresh_each_call(self, rng):
        assert ZeroKnowledgeProof.generate("t", rng) != ZeroKnowledgeProof.generate("t", rng)

    def test_split_requires_separator(self):
        with pytest.raises(ValueError):
            split_proof_string("nocolon")


class TestSpendProof:
    """Tests for ZeroKnowledgeProof.create_spend_proof()."""

    def test_fields(self, rng):
        balance = create_balance_proof(1001, 1000, 1)
        proof = ZeroKnowledgeProof.create_spend_proof(
            "txid", ["a" * 64], ["b" * 64, "c" * 64], balance, rng
        )
        assert proof.proof_type is ProofType.SPEND_PROOF
        assert proof.transaction_id == "txid"
        assert proof.public_inputs == ["input_count:1", "output_count:2"]
        assert proof.proof_data == hash_hex("a" * 64, "b" * 64, "c" * 64, balance, b"spend_proof")
        assert proof.verify()

    def test_verify_is_structural(self, rng):
        proof = ZeroKnowledgeProof.create_spend_proof("t", [], [], "x", rng)
        assert proof.verify()
        short = proof.model_copy(update={"proof_data": "ab"})
        assert not short.verify()

    def test_str(self, rng):
        proof = ZeroKnowledgeProof.create_spend_proof("t", [], [], "x", rng)
        assert "SpendProof" in str(proof)
        assert proof.proof_id in str(proof)

    def test_proof_type_values(self):
        assert [p.value for p in ProofType] == [
            "SpendProof", "OutputProof", "BalanceProof", "RangeProof",
        ]
