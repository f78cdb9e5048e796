"""
Test fixtures package for smtree tests.

Usage:
    from fixtures import make_key, make_tree, make_value

    def test_something():
        tree = make_tree()
        tree.update(make_key(1), make_value(2))
"""

from .common import (
    FailingNodeStore,
    make_key,
    make_populated_tree,
    make_tree,
    make_value,
)

__all__ = [
    "FailingNodeStore",
    "make_key",
    "make_populated_tree",
    "make_tree",
    "make_value",
]
