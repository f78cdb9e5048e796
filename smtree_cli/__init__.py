"""
smtree CLI

Command-line interface for a file-backed sparse Merkle tree.

Usage:
    python -m smtree_cli put alice 100
    python -m smtree_cli prove alice --out alice.json
    python -m smtree_cli verify alice.json
"""

__version__ = "0.1.0"
