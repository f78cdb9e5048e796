"""
CLI Verify Command

Verify a proof bundle offline. Needs no node store: only the bundle and,
optionally, a trusted root to check against instead of the bundle's own.

Usage:
    smtree verify <proof.json> [--root 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path

from pydantic import ValidationError

from smtree.crypto.hashing import from_hex, get_hash_function
from smtree.merkle.proof import verify_non_membership, verify_proof
from smtree.merkle.tree_hasher import TreeHasher
from smtree.schemas.errors import SMTException
from smtree.schemas.proof import ProofBundle

from smtree_cli.config import CLIConfig


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    kind: str = ""
    root: str = ""
    side_nodes: int = 0
    ok: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def load_bundle(path: Path) -> ProofBundle:
    return ProofBundle.model_validate_json(path.read_text())


def check_bundle(bundle: ProofBundle, root: bytes) -> bool:
    """Verify ``bundle`` against ``root``."""
    hasher = TreeHasher(get_hash_function(bundle.algorithm), hash_keys=bundle.hash_keys)
    key = from_hex(bundle.key)
    proof = bundle.proof.to_proof()
    if bundle.value is None:
        return verify_non_membership(key, proof, root, hasher=hasher)
    return verify_proof(key, from_hex(bundle.value), proof, root, hasher=hasher)


def verify_cmd(args: Namespace, config: CLIConfig) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code
    """
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        bundle = load_bundle(proof_path)
        root_hex = args.root or bundle.root
        ok = check_bundle(bundle, from_hex(root_hex))
    except ValidationError as e:
        print(f"Error: malformed proof bundle: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except SMTException as e:
        print(f"Error: [{e.code}] {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=str(proof_path),
        kind="membership" if bundle.is_membership else "non-membership",
        root=root_hex,
        side_nodes=len(bundle.proof.side_nodes),
        ok=ok,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"proof: {summary.proof_path}")
        print(f"kind: {summary.kind}")
        print(f"root: {summary.root}")
        print(f"side_nodes: {summary.side_nodes}")
        print(f"ok: {str(summary.ok).lower()}")

    if ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
