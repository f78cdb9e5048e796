"""
CLI Prove Command

Generate a self-contained proof bundle for a key against the current root.
A present key yields a membership proof (with its value); an absent key
yields a non-membership proof.

Usage:
    smtree prove <key> [--out PATH] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from smtree.crypto.hashing import to_hex
from smtree.schemas.errors import SMTException
from smtree.schemas.proof import MerkleProofModel, ProofBundle

from smtree_cli.config import CLIConfig
from smtree_cli.state import decode_arg, open_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def build_bundle(args: Namespace, config: CLIConfig) -> ProofBundle:
    key = decode_arg(args.key)
    tree = open_tree(config)
    value = tree.get(key)
    proof = tree.generate_proof(key)
    return ProofBundle(
        algorithm=tree.hasher.hash_function.name,
        hash_keys=tree.hasher.hash_keys,
        root=to_hex(tree.root),
        key=to_hex(key),
        value=to_hex(value) if value is not None else None,
        proof=MerkleProofModel.from_proof(proof),
    )


def prove_cmd(args: Namespace, config: CLIConfig) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code
    """
    try:
        bundle = build_bundle(args, config)
    except SMTException as e:
        print(f"Error: [{e.code}] {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    text = bundle.model_dump_json(indent=2)
    kind = "membership" if bundle.is_membership else "non-membership"

    if args.out:
        out = Path(args.out)
        out.write_text(text + "\n")
        logger.info(f"Wrote {kind} proof to {out}")
        if not args.json:
            print(f"{kind} proof written to {out} ({len(bundle.proof.side_nodes)} side nodes)")
    if args.json or not args.out:
        print(text)
    return EXIT_SUCCESS
