"""
Module 07 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m shielded_cli create-transaction --from alice --to bob --amount 1000 [--shielded] [--json]
    python -m shielded_cli verify-transaction --transaction-id <id> [--json]
    python -m shielded_cli generate-proof --transaction-id <id> [--json]
    python -m shielded_cli demonstrate-commitment --amount 1000 [--json]
    python -m shielded_cli show-merkle-tree [--json]
    python -m shielded_cli merkle-proof --index 0 [--json]
    python -m shielded_cli list-transactions [--json]
    python -m shielded_cli clear-storage
    python -m shielded_cli config --init

Environment Variables:
    SHIELDED_DATA_DIR       Directory holding transactions.json and merkle_tree.json
    SHIELDED_LOG_LEVEL      Log level (default: INFO)
    SHIELDED_LOG_FILE       Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.errors import LedgerException
from shielded_cli import __version__
from shielded_cli.commands import commitment, merkle, storage, transactions
from shielded_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="shielded",
        description="Shielded Ledger CLI - Create private transactions, inspect the Merkle tree, and demo commitments.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./shielded.json or ~/.config/shielded/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- create-transaction ---
    create_parser_ = subparsers.add_parser(
        "create-transaction",
        help="Create a new transaction",
        description="Create a public or shielded transaction and store it.",
    )
    create_parser_.add_argument("--from", dest="sender", type=str, required=True, help="Sender address")
    create_parser_.add_argument("--to", dest="recipient", type=str, required=True, help="Recipient address")
    create_parser_.add_argument("--amount", type=int, required=True, help="Amount to transfer")
    create_parser_.add_argument(
        "--shielded",
        action="store_true",
        default=False,
        help="Hide the amount behind commitments",
    )
    _add_json_flag(create_parser_)
    create_parser_.set_defaults(func=transactions.create_transaction_cmd)

    # --- verify-transaction ---
    verify_parser = subparsers.add_parser(
        "verify-transaction",
        help="Verify a transaction",
        description="Look up a stored transaction and check the id format.",
    )
    verify_parser.add_argument("--transaction-id", type=str, required=True, help="Transaction ID")
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=transactions.verify_transaction_cmd)

    # --- generate-proof ---
    proof_parser = subparsers.add_parser(
        "generate-proof",
        help="Generate a zero-knowledge proof",
        description="Generate a placeholder ZK proof for a transaction id.",
    )
    proof_parser.add_argument("--transaction-id", type=str, required=True, help="Transaction ID")
    _add_json_flag(proof_parser)
    proof_parser.set_defaults(func=transactions.generate_proof_cmd)

    # --- demonstrate-commitment ---
    commit_parser = subparsers.add_parser(
        "demonstrate-commitment",
        help="Demonstrate the commitment scheme",
        description="Commit to an amount, prove knowledge, open it and range-check it.",
    )
    commit_parser.add_argument("--amount", type=int, required=True, help="Amount to commit to")
    _add_json_flag(commit_parser)
    commit_parser.set_defaults(func=commitment.demonstrate_commitment_cmd)

    # --- show-merkle-tree ---
    show_parser = subparsers.add_parser(
        "show-merkle-tree",
        help="Show Merkle tree state",
    )
    _add_json_flag(show_parser)
    show_parser.set_defaults(func=merkle.show_merkle_tree_cmd)

    # --- merkle-proof ---
    merkle_proof_parser = subparsers.add_parser(
        "merkle-proof",
        help="Prove inclusion of a stored transaction",
        description="Generate and verify a Merkle inclusion proof for one leaf.",
    )
    merkle_proof_parser.add_argument("--index", type=int, required=True, help="Leaf index")
    _add_json_flag(merkle_proof_parser)
    merkle_proof_parser.set_defaults(func=merkle.merkle_proof_cmd)

    # --- list-transactions ---
    list_parser = subparsers.add_parser(
        "list-transactions",
        help="List all stored transactions",
    )
    _add_json_flag(list_parser)
    list_parser.set_defaults(func=transactions.list_transactions_cmd)

    # --- clear-storage ---
    clear_parser = subparsers.add_parser(
        "clear-storage",
        help="Clear all stored transactions",
    )
    clear_parser.set_defaults(func=storage.clear_storage_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Path for config file (default: shielded.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path or "shielded.json")
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (SHIELDED_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = load_config(Path(args.path)) if args.path else args.cli_config
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: shielded config [--init|--show] [--path PATH]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except LedgerException as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
