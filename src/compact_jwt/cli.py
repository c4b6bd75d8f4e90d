"""Command line tooling for signing claims and checking token signatures."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import codec
from .assembler import TokenAssembler
from .config import ConfigError, load_config
from .constants import SEGMENT_SEPARATOR
from .errors import JwtError
from .keys.factory import build_signature_key
from .logging import bind_context, clear_context, get_logger, setup_logging

logger = get_logger(__name__)


def _read_claims(source: str) -> dict[str, Any]:
    if source == "-":
        text = sys.stdin.read()
    else:
        with open(source, encoding="utf-8") as handle:
            text = handle.read()
    try:
        claims = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Claims are not valid JSON: {exc.msg}") from exc
    if not isinstance(claims, dict):
        raise ValueError("Claims must be a JSON object")
    return claims


def _cmd_sign(args: argparse.Namespace) -> int:
    config = load_config()
    setup_logging(config.log_level)
    bind_context(service=config.service_name, command="sign")
    claims = _read_claims(args.claims)
    with build_signature_key(config) as key:
        token = TokenAssembler().generate(claims, key)
    logger.info("cli.sign", algorithm=config.signing_algorithm, claimCount=len(claims))
    print(token)
    return 0


def _cmd_verify_signature(args: argparse.Namespace) -> int:
    config = load_config()
    setup_logging(config.log_level)
    bind_context(service=config.service_name, command="verify-signature")
    segments = args.token.strip().split(SEGMENT_SEPARATOR)
    if len(segments) != 3:
        raise ValueError("Token must contain exactly three segments")
    header_segment, claims_segment, signature_segment = segments
    signature = codec.decode(signature_segment)
    with build_signature_key(config) as key:
        valid = key.is_signature_valid(f"{header_segment}{SEGMENT_SEPARATOR}{claims_segment}", signature)
    logger.info("cli.verify_signature", algorithm=config.signing_algorithm, valid=valid)
    print("valid" if valid else "invalid")
    return 0 if valid else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="compact-jwt", description="Compact JWT tooling")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_parser = subparsers.add_parser("sign", help="Sign a JSON claim set with the configured key")
    sign_parser.add_argument(
        "--claims", default="-", help="Path to a JSON object of claims ('-' reads stdin)"
    )
    sign_parser.set_defaults(func=_cmd_sign)

    verify_parser = subparsers.add_parser(
        "verify-signature", help="Check a token signature against the configured key"
    )
    verify_parser.add_argument("token", help="Compact token to check")
    verify_parser.set_defaults(func=_cmd_verify_signature)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (JwtError, ConfigError, ValueError, OSError) as exc:
        parser.error(str(exc))
    finally:
        clear_context()


if __name__ == "__main__":  # pragma: no cover - manual execution path
    raise SystemExit(main())
