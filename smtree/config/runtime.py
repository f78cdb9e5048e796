"""
Runtime Configuration

Central configuration for tree construction: hash algorithm, key mode,
node store backend and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "SMTREE_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class HashConfig:
    """Configuration for the tree hash function."""
    algorithm: str = "sha256"


@dataclass
class StoreConfig:
    """Configuration for the node store backend."""
    backend: str = "memory"
    path: Optional[str] = None
    read_only: bool = False


@dataclass
class TreeConfig:
    """Configuration for key handling in the tree."""
    # Hash arbitrary-length keys into 256-bit paths instead of
    # requiring 32-byte keys.
    hash_keys: bool = False


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for a tree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SMTREE_HASH_ALGORITHM: hash algorithm name (sha256, sha3_256, blake2b, blake2s)
        - SMTREE_HASH_KEYS: hash keys into paths (true/false)
        - SMTREE_STORE_BACKEND: node store backend (memory, file)
        - SMTREE_STORE_PATH: directory for the file backend
        - SMTREE_STORE_READ_ONLY: open the store read-only (true/false)
        - SMTREE_LOG_LEVEL: log level
        - SMTREE_LOG_FILE: additional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        if os.getenv(f"{ENV_PREFIX}HASH_KEYS"):
            overrides.setdefault("tree", {})["hash_keys"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}HASH_KEYS", "false")
            )

        if os.getenv(f"{ENV_PREFIX}STORE_BACKEND"):
            overrides.setdefault("store", {})["backend"] = os.getenv(f"{ENV_PREFIX}STORE_BACKEND")
        if os.getenv(f"{ENV_PREFIX}STORE_PATH"):
            overrides.setdefault("store", {})["path"] = os.getenv(f"{ENV_PREFIX}STORE_PATH")
        if os.getenv(f"{ENV_PREFIX}STORE_READ_ONLY"):
            overrides.setdefault("store", {})["read_only"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}STORE_READ_ONLY", "false")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

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
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hash_data = data.get("hash", {})
        store_data = data.get("store", {})
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        return cls(
            hash=HashConfig(**hash_data) if hash_data else HashConfig(),
            store=StoreConfig(**store_data) if store_data else StoreConfig(),
            tree=TreeConfig(**tree_data) if tree_data else TreeConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
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
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "algorithm": self.hash.algorithm,
            },
            "store": {
                "backend": self.store.backend,
                "path": self.store.path,
                "read_only": self.store.read_only,
            },
            "tree": {
                "hash_keys": self.tree.hash_keys,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
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
