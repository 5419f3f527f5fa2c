"""
Runtime Configuration

Central configuration for storage, logging and the HTTP service.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "SHIELDED_"


@dataclass
class StorageConfig:
    """Where the transaction store keeps its files."""
    data_dir: str = "."
    transactions_file: str = "transactions.json"
    merkle_file: str = "merkle_tree.json"


@dataclass
class LoggingConfig:
    """Log level and optional log file."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class ApiConfig:
    """Bind address for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the shielded ledger.

    Can be loaded from:
    - Environment variables
    - YAML file
    - JSON file / dictionary
    - Programmatic construction
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SHIELDED_DATA_DIR: Directory holding the store files
        - SHIELDED_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - SHIELDED_LOG_FILE: Optional log file path
        - SHIELDED_API_HOST: API bind host
        - SHIELDED_API_PORT: API bind port
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DATA_DIR"):
            overrides.setdefault("storage", {})["data_dir"] = os.getenv(f"{ENV_PREFIX}DATA_DIR")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .yaml/.yml or .json file."""
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        import json
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        storage_data = data.get("storage", {})
        logging_data = data.get("logging", {})
        api_data = data.get("api", {})

        # Flat keys written by `shielded config --init`
        if "log_level" in data:
            logging_data = {**logging_data, "level": data["log_level"]}
        if "log_file" in data:
            logging_data = {**logging_data, "log_file": data["log_file"]}
        if "data_dir" in data:
            storage_data = {**storage_data, "data_dir": data["data_dir"]}

        return cls(
            storage=StorageConfig(**storage_data) if storage_data else StorageConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
            api=ApiConfig(**api_data) if api_data else ApiConfig(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("storage", "logging", "api"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "storage": {
                "data_dir": self.storage.data_dir,
                "transactions_file": self.storage.transactions_file,
                "merkle_file": self.storage.merkle_file,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
