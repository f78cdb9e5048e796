"""
Runtime Configuration Module

Provides configuration loading and management for sparse Merkle trees.
"""

from .runtime import (
    HashConfig,
    LoggingConfig,
    RuntimeConfig,
    StoreConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "StoreConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
]
