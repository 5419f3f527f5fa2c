"""
Module 08 - API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /transactions creates and stores a transaction
3. Merkle proof round trip over HTTP
4. Commitment and proof endpoints
5. Ledger errors map to structured JSON bodies (400 / 404)
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import get_store, reset_store
from core.storage.store import TransactionStore


@pytest.fixture
def store(tmp_path):
    return TransactionStore.load(tmp_path)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        reset_store()


def create(client, amount=1000, shielded=True):
    response = client.post(
        "/transactions",
        json={"from": "alice", "to": "bob", "amount": amount, "shielded": shielded},
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:
    """Liveness endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "shielded-ledger-api", "version": "v1"}

    def test_root(self, client):
        assert client.get("/").json()["ok"] is True


class TestTransactions:
    """Transaction endpoints."""

    def test_create_shielded(self, client, store):
        data = create(client)
        tx = data["transaction"]
        assert tx["from"] == "alice"
        assert tx["transaction_type"] == "Shielded"
        assert tx["fee"] == 1
        assert data["leaf_index"] == 0
        assert data["merkle_root"] == store.merkle_tree.root
        assert store.get_transaction(tx["id"]) is not None

    def test_create_rejects_negative_amount(self, client):
        response = client.post("/transactions", json={"from": "a", "to": "b", "amount": -1})
        assert response.status_code == 422

    def test_shielded_overflow_is_400(self, client):
        response = client.post(
            "/transactions",
            json={"from": "a", "to": "b", "amount": 2**64 - 1, "shielded": True},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "INVALID_AMOUNT"

    def test_list_and_get(self, client):
        tx_id = create(client)["transaction"]["id"]
        create(client, amount=3, shielded=False)

        listing = client.get("/transactions").json()
        assert listing["count"] == 2

        fetched = client.get(f"/transactions/{tx_id}").json()
        assert fetched["transaction"]["id"] == tx_id
        assert fetched["leaf_index"] == 0

    def test_get_missing_is_404(self, client):
        response = client.get("/transactions/unknown")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TRANSACTION_NOT_FOUND"

    def test_verify(self, client):
        tx_id = create(client)["transaction"]["id"]
        assert client.get(f"/transactions/{tx_id}/verify").json() == {
            "ok": True,
            "transaction_id": tx_id,
            "format_valid": True,
            "stored": True,
        }
        short = client.get("/transactions/abc/verify").json()
        assert short["ok"] is False
        assert short["stored"] is False


class TestMerkle:
    """Merkle endpoints."""

    def test_empty_tree(self, client):
        data = client.get("/merkle").json()
        assert data["leaf_count"] == 0
        assert data["root"] == "0" * 68

    def test_proof_round_trip(self, client):
        ids = [create(client)["transaction"]["id"] for _ in range(5)]

        proof = client.get("/merkle/proof/4").json()
        assert proof["leaf_index"] == 4

        verify = client.post(
            "/merkle/verify",
            json={"leaf_data": ids[4], "proof": proof["proof"], "leaf_index": 4},
        ).json()
        assert verify == {"valid": True, "root": proof["root"]}

        wrong = client.post(
            "/merkle/verify",
            json={"leaf_data": ids[3], "proof": proof["proof"], "leaf_index": 4},
        ).json()
        assert wrong["valid"] is False

    def test_proof_out_of_range_is_400(self, client):
        response = client.get("/merkle/proof/0")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MERKLE_TREE_ERROR"


class TestCommitmentsAndProofs:
    """Stateless endpoints."""

    def test_commit(self, client):
        data = client.post("/commitments", json={"amount": 1000}).json()
        assert len(data["commitment"]) == 64
        assert len(data["knowledge_proof"]) == 64
        assert data["valid"] is True

    def test_open(self, client):
        body = {
            "commitment_hash": "2ed083ea8cf1c7333075cad2f0f4d7d18ae9105512c01c65a2aa160a7f22e8aa",
            "amount": 100,
            "nonce": "00" * 32,
        }
        assert client.post("/commitments/open", json=body).json() == {"valid": True}
        assert client.post("/commitments/open", json={**body, "amount": 99}).json() == {
            "valid": False
        }

    def test_open_bad_nonce_is_400(self, client):
        response = client.post(
            "/commitments/open",
            json={"commitment_hash": "a" * 64, "amount": 1, "nonce": "zz"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CRYPTO_ERROR"

    def test_range_proof(self, client):
        ok = client.post("/proofs/range", json={"amount": 10, "min": 10, "max": 20})
        assert ok.status_code == 200
        assert len(ok.json()["proof"]) == 64

        out = client.post("/proofs/range", json={"amount": 21, "min": 10, "max": 20})
        assert out.status_code == 400
        assert out.json()["error"]["code"] == "INVALID_AMOUNT"

        inverted = client.post("/proofs/range", json={"amount": 15, "min": 20, "max": 10})
        assert inverted.status_code == 400
        assert inverted.json()["error"]["code"] == "INVALID_REQUEST"

    def test_balance_proof(self, client):
        ok = client.post(
            "/proofs/balance", json={"input_total": 1001, "output_total": 1000, "fee": 1}
        )
        assert ok.status_code == 200

        bad = client.post(
            "/proofs/balance", json={"input_total": 1001, "output_total": 1000, "fee": 2}
        )
        assert bad.status_code == 400
        assert bad.json()["error"]["code"] == "INVALID_TRANSACTION"
