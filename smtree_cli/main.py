"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m smtree_cli put <key> <value> [--json]
    python -m smtree_cli get <key> [--json]
    python -m smtree_cli remove <key> [--json]
    python -m smtree_cli root [--json]
    python -m smtree_cli prove <key> [--out PATH] [--json]
    python -m smtree_cli verify <proof.json> [--root 0x...] [--json]
    python -m smtree_cli config --init

Environment Variables:
    SMTREE_STORE_PATH           Directory of the file-backed store (default: .smtree)
    SMTREE_HASH_ALGORITHM       Hash algorithm (sha256, sha3_256, blake2b, blake2s)
    SMTREE_HASH_KEYS            Hash keys into 256-bit paths (default: true)
    SMTREE_LOG_LEVEL            Log level (default: WARNING)
    SMTREE_LOG_FILE             Additional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from smtree.crypto.hashing import available_algorithms

from smtree_cli import __version__
from smtree_cli.commands import prove, tree, verify
from smtree_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="smtree",
        description="Sparse Merkle tree CLI - store key/values, print roots, generate and verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./smtree.json or ~/.config/smtree/config.json)",
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Store directory (overrides config)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        choices=available_algorithms(),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- put command ---
    put_parser = subparsers.add_parser("put", help="Set a key to a value")
    put_parser.add_argument("key", type=str, help="Key (0x-hex or UTF-8)")
    put_parser.add_argument("value", type=str, help="Value (0x-hex or UTF-8)")
    _add_json_flag(put_parser)
    put_parser.set_defaults(func=tree.put_cmd)

    # --- get command ---
    get_parser = subparsers.add_parser("get", help="Print the value for a key")
    get_parser.add_argument("key", type=str, help="Key (0x-hex or UTF-8)")
    _add_json_flag(get_parser)
    get_parser.set_defaults(func=tree.get_cmd)

    # --- remove command ---
    remove_parser = subparsers.add_parser("remove", help="Remove a key")
    remove_parser.add_argument("key", type=str, help="Key (0x-hex or UTF-8)")
    _add_json_flag(remove_parser)
    remove_parser.set_defaults(func=tree.remove_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser("root", help="Print the current root")
    _add_json_flag(root_parser)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a proof bundle for a key",
        description="Write a membership (or non-membership) proof bundle for a key.",
    )
    prove_parser.add_argument("key", type=str, help="Key (0x-hex or UTF-8)")
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the bundle to this file instead of stdout",
    )
    _add_json_flag(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof bundle offline",
        description="Verify a proof bundle without access to the store.",
    )
    verify_parser.add_argument("proof_path", type=str, help="Path to proof bundle JSON")
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root (0x-hex) to verify against instead of the bundle's root",
    )
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="smtree.json",
        help="Path for config file (default: smtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace, config) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (SMTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config_dict = {
            "store_path": config.store_path,
            "algorithm": config.algorithm,
            "hash_keys": config.hash_keys,
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: smtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.store:
        config.store_path = args.store
    if args.algorithm:
        config.algorithm = args.algorithm
    if args.log_level:
        config.log_level = args.log_level

    if hasattr(args, "json") and not args.json:
        args.json = config.default_output_format == "json"

    setup_logging(config.log_level, config.log_file)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
