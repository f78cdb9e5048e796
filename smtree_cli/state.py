"""
CLI Tree State

Opens the file-backed tree described by CLIConfig and persists its root
between invocations. The root lives in a ``ROOT`` file (0x-hex) at the top
of the store directory, next to the entry shards.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from smtree.crypto.hashing import from_hex, to_hex
from smtree.merkle.sparse_merkle_tree import SparseMerkleTree

from smtree_cli.config import CLIConfig


logger = logging.getLogger(__name__)

ROOT_FILE = "ROOT"


def decode_arg(text: str) -> bytes:
    """CLI key/value argument: 0x-hex is decoded, anything else is UTF-8."""
    if text.startswith("0x"):
        return from_hex(text)
    return text.encode("utf-8")


def encode_value(value: bytes) -> str:
    """Printable form of a value: UTF-8 text if it decodes, else 0x-hex."""
    try:
        text = value.decode("utf-8")
    except UnicodeDecodeError:
        return to_hex(value)
    if text.startswith("0x") or not text.isprintable():
        return to_hex(value)
    return text


def read_root(store_path: str | Path) -> bytes | None:
    root_file = Path(store_path) / ROOT_FILE
    if not root_file.exists():
        return None
    return from_hex(root_file.read_text().strip())


def write_root(store_path: str | Path, root: bytes) -> None:
    directory = Path(store_path)
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".tmp-root-")
    with os.fdopen(fd, "w") as f:
        f.write(to_hex(root) + "\n")
    os.replace(tmp_name, directory / ROOT_FILE)


def open_tree(config: CLIConfig) -> SparseMerkleTree:
    """Open (or create) the tree at ``config.store_path``."""
    root = read_root(config.store_path)
    tree = SparseMerkleTree.from_config(config.to_runtime_config(), root=root)
    logger.debug(f"Opened tree at {config.store_path} with root {to_hex(tree.root)}")
    return tree


def save_tree(config: CLIConfig, tree: SparseMerkleTree) -> None:
    write_root(config.store_path, tree.root)
