"""
Runtime Configuration Tests
Tests for core/config/runtime.py
"""
import json

from core.config.runtime import (
    RuntimeConfig,
    get_default_config,
    set_default_config,
)


class TestDefaults:
    """Defaults with no file and no environment."""

    def test_defaults(self, clean_env):
        config = RuntimeConfig()
        assert config.storage.data_dir == "."
        assert config.storage.transactions_file == "transactions.json"
        assert config.storage.merkle_file == "merkle_tree.json"
        assert config.logging.level == "INFO"
        assert config.logging.log_file is None
        assert config.api.host == "127.0.0.1"
        assert config.api.port == 8000

    def test_default_config_is_cached(self, clean_env):
        assert get_default_config() is get_default_config()
        custom = RuntimeConfig()
        set_default_config(custom)
        assert get_default_config() is custom


class TestLoading:
    """Dictionary, JSON and YAML loading."""

    def test_from_dict_partial(self, clean_env):
        config = RuntimeConfig.from_dict({"storage": {"data_dir": "/tmp/ledger"}})
        assert config.storage.data_dir == "/tmp/ledger"
        assert config.storage.merkle_file == "merkle_tree.json"

    def test_flat_keys(self, clean_env):
        config = RuntimeConfig.from_dict({"log_level": "DEBUG", "data_dir": "d"})
        assert config.logging.level == "DEBUG"
        assert config.storage.data_dir == "d"

    def test_from_json_file(self, clean_env, tmp_path):
        path = tmp_path / "shielded.json"
        path.write_text(json.dumps({"api": {"port": 9001}}))
        assert RuntimeConfig.from_file(path).api.port == 9001

    def test_from_yaml_file(self, clean_env, tmp_path):
        path = tmp_path / "shielded.yaml"
        path.write_text("logging:\n  level: WARNING\nstorage:\n  data_dir: ./data\n")
        config = RuntimeConfig.from_file(path)
        assert config.logging.level == "WARNING"
        assert config.storage.data_dir == "./data"

    def test_to_dict_round_trip(self, clean_env):
        config = RuntimeConfig.from_dict({"api": {"host": "0.0.0.0", "port": 1234}})
        assert RuntimeConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()


class TestEnvironment:
    """SHIELDED_* overrides."""

    def test_from_env(self, clean_env):
        clean_env.setenv("SHIELDED_DATA_DIR", "/var/ledger")
        clean_env.setenv("SHIELDED_API_PORT", "8123")
        config = RuntimeConfig.from_env()
        assert config.storage.data_dir == "/var/ledger"
        assert config.api.port == 8123

    def test_env_overrides_file(self, clean_env):
        clean_env.setenv("SHIELDED_LOG_LEVEL", "ERROR")
        base = RuntimeConfig.from_dict({"logging": {"level": "DEBUG", "log_file": "x.log"}})
        config = base.with_env_overrides()
        assert config.logging.level == "ERROR"
        assert config.logging.log_file == "x.log"
        # original untouched
        assert base.logging.level == "DEBUG"

    def test_no_overrides_returns_same(self, clean_env):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config
