"""
Runtime Configuration Unit Tests
Tests for smtree/config/runtime.py
"""
import pytest

from smtree.config.runtime import (
    HashConfig,
    RuntimeConfig,
    StoreConfig,
    get_default_config,
    set_default_config,
)


class TestDefaults:

    def test_default_values(self):
        config = RuntimeConfig()

        assert config.hash.algorithm == "sha256"
        assert config.store.backend == "memory"
        assert config.store.path is None
        assert config.store.read_only is False
        assert config.tree.hash_keys is False
        assert config.logging.level == "INFO"

    def test_to_dict_round_trip(self):
        config = RuntimeConfig(
            hash=HashConfig(algorithm="blake2s"),
            store=StoreConfig(backend="file", path="/tmp/x"),
        )

        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestFromDict:

    def test_partial_data(self):
        config = RuntimeConfig.from_dict({"store": {"backend": "file", "path": "data"}})

        assert config.store.path == "data"
        assert config.hash.algorithm == "sha256"

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            RuntimeConfig.from_dict({"hash": {"name": "sha256"}})

    def test_extra_preserved(self):
        assert RuntimeConfig.from_dict({"extra": {"k": 1}}).extra == {"k": 1}


class TestFromYaml:

    def test_load(self, tmp_path):
        path = tmp_path / "smtree.yaml"
        path.write_text(
            "hash:\n"
            "  algorithm: sha3_256\n"
            "tree:\n"
            "  hash_keys: true\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hash.algorithm == "sha3_256"
        assert config.tree.hash_keys is True

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")


class TestEnvironment:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SMTREE_HASH_ALGORITHM", "blake2b")
        monkeypatch.setenv("SMTREE_HASH_KEYS", "yes")
        monkeypatch.setenv("SMTREE_STORE_BACKEND", "file")
        monkeypatch.setenv("SMTREE_STORE_PATH", "/var/lib/smtree")
        monkeypatch.setenv("SMTREE_STORE_READ_ONLY", "1")
        monkeypatch.setenv("SMTREE_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hash.algorithm == "blake2b"
        assert config.tree.hash_keys is True
        assert config.store.backend == "file"
        assert config.store.path == "/var/lib/smtree"
        assert config.store.read_only is True
        assert config.logging.level == "DEBUG"

    def test_false_values(self, monkeypatch):
        monkeypatch.setenv("SMTREE_HASH_KEYS", "off")

        assert RuntimeConfig.from_env().tree.hash_keys is False

    def test_with_env_overrides_copies(self, monkeypatch):
        base = RuntimeConfig.from_dict({"store": {"backend": "file", "path": "a"}})
        monkeypatch.setenv("SMTREE_STORE_PATH", "b")

        overridden = base.with_env_overrides()

        assert overridden.store.path == "b"
        assert overridden.store.backend == "file"
        assert base.store.path == "a"

    def test_with_env_overrides_noop(self):
        base = RuntimeConfig()

        assert base.with_env_overrides() is base


class TestDefaultConfig:

    def test_cached(self):
        assert get_default_config() is get_default_config()

    def test_set_and_reset(self, monkeypatch):
        custom = RuntimeConfig(hash=HashConfig(algorithm="blake2s"))
        set_default_config(custom)
        assert get_default_config() is custom

        set_default_config(None)
        monkeypatch.setenv("SMTREE_HASH_ALGORITHM", "sha3_256")
        assert get_default_config().hash.algorithm == "sha3_256"
