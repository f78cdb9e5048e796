"""
Pytest configuration and shared fixtures for smtree tests.

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
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_key = _common.make_key
make_value = _common.make_value
make_tree = _common.make_tree
make_populated_tree = _common.make_populated_tree
FailingNodeStore = _common.FailingNodeStore


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def memory_store():
    """Provide an empty in-memory node store."""
    from smtree.store import InMemoryNodeStore
    return InMemoryNodeStore()


@pytest.fixture
def tree(memory_store):
    """Provide an empty SHA-256 tree over an in-memory store."""
    return make_tree(store=memory_store)


@pytest.fixture
def populated_tree():
    """Provide a tree holding keys [1;32] -> [10;32] and [2;32] -> [20;32]."""
    return make_populated_tree()


@pytest.fixture
def file_store(tmp_path):
    """Provide a file-backed node store in a temporary directory."""
    from smtree.store import FileNodeStore
    return FileNodeStore(tmp_path / "store")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Drop SMTREE_* variables so the host environment cannot leak in."""
    import os
    for name in list(os.environ):
        if name.startswith("SMTREE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_default_config():
    """Keep the process-wide default RuntimeConfig from leaking between tests."""
    from smtree.config.runtime import set_default_config
    set_default_config(None)
    yield
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
