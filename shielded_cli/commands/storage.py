"""
Module 07 - CLI Storage Commands

Usage:
    shielded clear-storage
"""

from __future__ import annotations

import logging
from argparse import Namespace

from shielded_cli.config import open_store


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def clear_storage_cmd(args: Namespace) -> int:
    """Handle clear-storage command."""
    store = open_store(args.cli_config)
    count = len(store)
    store.clear()
    print(f"Cleared {count} transaction(s) from persistent storage.")
    return EXIT_SUCCESS
