#!/usr/bin/env python3
"""
datareg -- Dataset registry credential and feed tooling.

Usage:
  python main.py salt
  python main.py salt --bytes 16
  python main.py hash
  python main.py hash --algorithm sha512 --salt 0011223344 --json
  python main.py verify --salt 0011223344 --hash 6d6e...3f6e
  python main.py annotations
  python main.py annotations --filter source=ENCODE --filter status=released

Passwords are always read from the terminal (never from argv, where they
would land in shell history and the process list).

Environment variables:
  HASH_IMPLEMENTATION  Default digest for `hash` / `verify` (default: sha256).
  DGA_REGISTRY_URL     Annotation registry endpoint for `annotations`.
  LOG_LEVEL            Logging level (default: INFO).
"""

import argparse
import getpass
import json
import logging
import sys
from typing import Optional

from auth.passwords import derive_hash, generate_salt, verify_password
from core.config import get_settings
from feeds.dga import dga_annotations

logger = logging.getLogger("datareg.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.strip().upper() or "INFO", logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_filters(pairs: list[str]) -> dict[str, str]:
    """Turn ["key=value", ...] into a dict. Raises ValueError on a pair without '='."""
    criteria: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid filter {pair!r}. Expected key=value.")
        criteria[key] = value
    return criteria


def _read_password(prompt: str = "Password: ") -> str:
    return getpass.getpass(prompt)


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------


def cmd_salt(args: argparse.Namespace) -> int:
    print(generate_salt(args.bytes or get_settings().salt_bytes))
    return 0


def cmd_hash(args: argparse.Namespace) -> int:
    algorithm = args.algorithm or get_settings().hash_implementation
    salt = args.salt or generate_salt(get_settings().salt_bytes)
    password_hash = derive_hash(_read_password(), algorithm, salt)
    if args.json:
        print(json.dumps({"salt": salt, "algorithm": algorithm, "hash": password_hash}, indent=2))
    else:
        print(f"salt:      {salt}")
        print(f"algorithm: {algorithm}")
        print(f"hash:      {password_hash}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    algorithm = args.algorithm or get_settings().hash_implementation
    if verify_password(_read_password(), args.salt, algorithm)(args.hash):
        print("Password matches.")
        return 0
    print("Password does not match.")
    return 1


def cmd_annotations(args: argparse.Namespace) -> int:
    criteria = _parse_filters(args.filter or [])
    entries = dga_annotations(criteria, url=args.url)
    print(json.dumps(entries, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datareg",
        description="Dataset registry credential and feed tooling.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p_salt = sub.add_parser("salt", help="Print a new random salt")
    p_salt.add_argument("--bytes", type=int, default=None, metavar="N", help="Salt length in bytes (default: SALT_BYTES)")
    p_salt.set_defaults(func=cmd_salt)

    p_hash = sub.add_parser("hash", help="Derive a password hash (password read from the terminal)")
    p_hash.add_argument("--algorithm", metavar="DIGEST", help="hashlib digest name (default: HASH_IMPLEMENTATION)")
    p_hash.add_argument("--salt", metavar="HEX", help="Existing salt to reuse (default: generate a new one)")
    p_hash.add_argument("--json", action="store_true", help="Output structured JSON")
    p_hash.set_defaults(func=cmd_hash)

    p_verify = sub.add_parser("verify", help="Check a password against a stored salt and hash")
    p_verify.add_argument("--salt", required=True, metavar="HEX", help="Stored salt")
    p_verify.add_argument("--hash", required=True, metavar="HEX", help="Stored hash")
    p_verify.add_argument("--algorithm", metavar="DIGEST", help="Stored digest name (default: HASH_IMPLEMENTATION)")
    p_verify.set_defaults(func=cmd_verify)

    p_ann = sub.add_parser("annotations", help="List dataset entries from the DGA annotation registry")
    p_ann.add_argument(
        "--filter",
        action="append",
        metavar="KEY=VALUE",
        help="Keep entries where KEY equals VALUE (repeatable)",
    )
    p_ann.add_argument("--url", metavar="URL", help="Registry URL (default: DGA_REGISTRY_URL)")
    p_ann.set_defaults(func=cmd_annotations)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    _configure_logging(get_settings().log_level)

    try:
        return args.func(args)
    except ValueError as e:
        # Unsupported digest names and malformed filters land here.
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"  [!] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
