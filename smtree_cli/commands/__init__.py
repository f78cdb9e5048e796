"""
CLI command modules.
"""

from smtree_cli.commands import prove, tree, verify

__all__ = ["prove", "tree", "verify"]
