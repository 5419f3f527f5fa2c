"""API route handlers."""

from api.routes import commitments, health, merkle, transactions

__all__ = ["commitments", "health", "merkle", "transactions"]
