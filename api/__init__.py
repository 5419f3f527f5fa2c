"""
Module 08 - Minimal API (FastAPI)

HTTP API for the shielded ledger:
- POST /transactions - Create and store a transaction
- GET /merkle - Merkle tree snapshot
- GET /merkle/proof/{leaf_index} - Inclusion proof
- POST /commitments - Commit to an amount
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
