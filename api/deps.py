"""
Module 08 - API Dependencies

Dependency injection for the API.
Provides the runtime config and the process-wide transaction store.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.storage.store import TransactionStore

logger = logging.getLogger(__name__)


_store: TransactionStore | None = None
_store_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./shielded.json
      2. ./.shielded.json
      3. ~/.config/shielded/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "shielded.json",
        Path.cwd() / ".shielded.json",
        Path.home() / ".config" / "shielded" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_config() -> RuntimeConfig:
    """FastAPI dependency: the runtime configuration."""
    return _load_runtime_config()


def get_store() -> TransactionStore:
    """
    FastAPI dependency: the shared transaction store.

    Loaded once per process; every request sees the same store and its
    live Merkle accumulator.
    """
    global _store
    with _store_lock:
        if _store is None:
            config = get_config()
            _store = TransactionStore.load(
                config.storage.data_dir,
                transactions_file=config.storage.transactions_file,
                merkle_file=config.storage.merkle_file,
            )
        return _store


def reset_store() -> None:
    """Forget the shared store so the next request reloads it from disk."""
    global _store
    with _store_lock:
        _store = None
