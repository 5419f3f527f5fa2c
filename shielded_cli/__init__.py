"""
Module 07 - Shielded Ledger CLI

Command-line interface for the shielded ledger.

Usage:
    python -m shielded_cli create-transaction --from alice --to bob --amount 1000 --shielded
    python -m shielded_cli show-merkle-tree
    python -m shielded_cli merkle-proof --index 0
    python -m shielded_cli demonstrate-commitment --amount 1000
"""

__version__ = "0.1.0"
