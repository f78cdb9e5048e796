"""
Module 04 - Node Store Factory

Builds a node store backend from StoreConfig.
"""

from __future__ import annotations

import logging

from smtree.config.runtime import StoreConfig
from smtree.schemas.errors import ConfigurationException
from smtree.store.base import BaseNodeStore
from smtree.store.file import FileNodeStore
from smtree.store.memory import InMemoryNodeStore
from smtree.store.readonly import ReadOnlyNodeStore


logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "file")


def create_store(config: StoreConfig) -> BaseNodeStore:
    """
    Create the node store described by ``config``.

    Raises:
        ConfigurationException: If the backend is unknown or the file
            backend has no path
    """
    backend = config.backend.lower()
    if backend == "memory":
        store: BaseNodeStore = InMemoryNodeStore()
    elif backend == "file":
        if not config.path:
            raise ConfigurationException(
                "File store backend requires a path",
                setting="store.path",
            )
        store = FileNodeStore(config.path)
    else:
        raise ConfigurationException(
            f"Unknown store backend: {config.backend!r}",
            setting="store.backend",
            details={"available": list(STORE_BACKENDS)},
        )

    if config.read_only:
        store = ReadOnlyNodeStore(store)

    logger.debug(f"Created node store {store!r}")
    return store
