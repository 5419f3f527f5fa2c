"""
CLI command modules.
"""

from shielded_cli.commands import commitment, merkle, storage, transactions

__all__ = ["commitment", "merkle", "storage", "transactions"]
