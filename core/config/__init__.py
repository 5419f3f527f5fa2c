"""
Runtime Configuration Module

Provides configuration loading and management for the shielded ledger.
"""

from .runtime import (
    ApiConfig,
    LoggingConfig,
    RuntimeConfig,
    StorageConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "StorageConfig",
    "get_default_config",
    "set_default_config",
]
