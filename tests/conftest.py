"""
Pytest configuration and shared fixtures for shielded ledger tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from core.config.runtime import set_default_config  # noqa: E402
from core.crypto.randomness import DeterministicRandomSource  # noqa: E402
from core.merkle.accumulator import MerkleAccumulator  # noqa: E402
from core.storage.store import TransactionStore  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random source so nonces and ids repeat across runs."""
    return DeterministicRandomSource(b"shielded-ledger-tests")


@pytest.fixture
def tmp_store(tmp_path):
    """Empty transaction store rooted in a temporary directory."""
    return TransactionStore.load(tmp_path)


@pytest.fixture
def accumulator():
    """Accumulator holding the leaves L0..L4."""
    return MerkleAccumulator.from_leaf_data([f"L{i}" for i in range(5)])


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SHIELDED_* variables so config tests start from defaults."""
    for name in (
        "SHIELDED_DATA_DIR",
        "SHIELDED_LOG_LEVEL",
        "SHIELDED_LOG_FILE",
        "SHIELDED_API_HOST",
        "SHIELDED_API_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield monkeypatch
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
