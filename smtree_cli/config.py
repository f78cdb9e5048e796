"""
CLI Configuration

Configuration management for the smtree CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from smtree.config.runtime import (
    HashConfig,
    LoggingConfig,
    RuntimeConfig,
    StoreConfig,
    TreeConfig,
)


# Environment variable prefix
ENV_PREFIX = "SMTREE_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Tree settings
    store_path: str = ".smtree"
    algorithm: str = "sha256"
    hash_keys: bool = True

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime_config(self) -> RuntimeConfig:
        """Runtime config for a file-backed tree at ``store_path``."""
        return RuntimeConfig(
            hash=HashConfig(algorithm=self.algorithm),
            store=StoreConfig(backend="file", path=self.store_path),
            tree=TreeConfig(hash_keys=self.hash_keys),
            logging=LoggingConfig(level=self.log_level, file=self.log_file),
        )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """Apply environment variables on top of ``config`` (default: a fresh CLIConfig)."""
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}STORE_PATH"):
        config.store_path = os.getenv(f"{ENV_PREFIX}STORE_PATH", config.store_path)
    if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
        config.algorithm = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM", config.algorithm)
    config.hash_keys = _env_bool(f"{ENV_PREFIX}HASH_KEYS", config.hash_keys)

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    config.store_path = data.get("store_path", config.store_path)
    config.algorithm = data.get("algorithm", config.algorithm)
    config.hash_keys = data.get("hash_keys", config.hash_keys)

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration with precedence: env > file > defaults.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "smtree.json",
            Path.cwd() / ".smtree.json",
            Path.home() / ".config" / "smtree" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "store_path": ".smtree",
  "algorithm": "sha256",
  "hash_keys": true,
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""
