"""
Module 07 - CLI Configuration

Configuration discovery for the shielded CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.storage.store import TransactionStore


logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Config file locations searched when --config is not given."""
    return [
        Path.cwd() / "shielded.json",
        Path.cwd() / ".shielded.json",
        Path.home() / ".config" / "shielded" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file (.json, .yaml or .yml)

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                logger.debug("Using config file %s", default_path)
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def open_store(config: RuntimeConfig) -> TransactionStore:
    """Load the transaction store described by config."""
    return TransactionStore.load(
        config.storage.data_dir,
        transactions_file=config.storage.transactions_file,
        merkle_file=config.storage.merkle_file,
    )


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "storage": {
    "data_dir": ".",
    "transactions_file": "transactions.json",
    "merkle_file": "merkle_tree.json"
  },
  "logging": {
    "level": "INFO",
    "log_file": null
  },
  "api": {
    "host": "127.0.0.1",
    "port": 8000
  }
}
"""
