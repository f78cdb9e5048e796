"""
CLI Tree Commands

Read and mutate the file-backed tree:

Usage:
    smtree put <key> <value> [--json]
    smtree get <key> [--json]
    smtree remove <key> [--json]
    smtree root [--json]

Keys and values starting with 0x are hex-decoded; anything else is UTF-8.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from smtree.crypto.hashing import to_hex
from smtree.schemas.errors import SMTException

from smtree_cli.config import CLIConfig
from smtree_cli.state import decode_arg, encode_value, open_tree, save_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 3


def _emit(args: Namespace, payload: dict, human: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(human)


def _fail(args: Namespace, e: Exception) -> int:
    if isinstance(e, SMTException):
        if args.json:
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        else:
            print(f"Error: [{e.code}] {e.message}", file=sys.stderr)
    else:
        print(f"Error: {e}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR


def put_cmd(args: Namespace, config: CLIConfig) -> int:
    """Set a key to a value and persist the new root."""
    try:
        key = decode_arg(args.key)
        value = decode_arg(args.value)
        tree = open_tree(config)
        tree.update(key, value)
        save_tree(config, tree)
    except (SMTException, ValueError, OSError) as e:
        return _fail(args, e)

    root = to_hex(tree.root)
    logger.info(f"Stored {args.key!r}, root {root}")
    _emit(args, {"key": args.key, "root": root}, f"root: {root}")
    return EXIT_SUCCESS


def get_cmd(args: Namespace, config: CLIConfig) -> int:
    """Print the value stored for a key."""
    try:
        key = decode_arg(args.key)
        tree = open_tree(config)
        value = tree.get(key)
    except (SMTException, ValueError, OSError) as e:
        return _fail(args, e)

    if value is None:
        _emit(args, {"key": args.key, "found": False}, f"not found: {args.key}")
        return EXIT_NOT_FOUND

    _emit(
        args,
        {"key": args.key, "found": True, "value": encode_value(value)},
        encode_value(value),
    )
    return EXIT_SUCCESS


def remove_cmd(args: Namespace, config: CLIConfig) -> int:
    """Remove a key and persist the new root."""
    try:
        key = decode_arg(args.key)
        tree = open_tree(config)
        tree.remove(key)
        save_tree(config, tree)
    except (SMTException, ValueError, OSError) as e:
        return _fail(args, e)

    root = to_hex(tree.root)
    _emit(args, {"key": args.key, "root": root}, f"root: {root}")
    return EXIT_SUCCESS


def root_cmd(args: Namespace, config: CLIConfig) -> int:
    """Print the current root."""
    try:
        tree = open_tree(config)
    except (SMTException, ValueError, OSError) as e:
        return _fail(args, e)

    root = to_hex(tree.root)
    _emit(args, {"root": root, "empty": tree.is_empty}, root)
    return EXIT_SUCCESS
