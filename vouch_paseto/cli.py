"""
Vouch PASETO Command Line Interface.

Provides commands for generating keys, signing payloads, and verifying tokens.
"""

import argparse
import json
import logging
import sys

from vouch_paseto import config
from vouch_paseto.errors import PasetoError
from vouch_paseto.keys import generate_keys, key_to_jwk
from vouch_paseto.signer import sign
from vouch_paseto.token import decode_footer
from vouch_paseto.verifier import verify


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def cmd_keygen(args: argparse.Namespace) -> int:
    """Generate a new Ed25519 key pair."""
    keys = generate_keys()

    if args.env:
        print(f"export PASETO_SECRET_KEY='{keys.secret_key}'")
        print(f"export PASETO_PUBLIC_KEY='{keys.public_key}'")
    elif args.jwk:
        print(key_to_jwk(keys.secret_key))
        print(key_to_jwk(keys.public_key))
    else:
        print("--- SECRET KEY (Keep Secret / Set as PASETO_SECRET_KEY) ---")
        print(keys.secret_key)
        print("\n--- PUBLIC KEY (Share with verifiers) ---")
        print(keys.public_key)
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    """Sign a message or JSON payload."""
    secret_key = args.key or config.SECRET_KEY
    if not secret_key:
        print("Error: Missing secret key. Set PASETO_SECRET_KEY or use --key", file=sys.stderr)
        return 1

    try:
        token = sign(secret_key, args.message, footer=args.footer, assertion=args.assertion)
    except PasetoError as e:
        print(f"Error: {e.kind.value}: {e.detail}", file=sys.stderr)
        return 1

    print(token)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify a token and print its contents."""
    public_key = args.key or config.PUBLIC_KEY
    if not public_key:
        print("Error: Missing public key. Set PASETO_PUBLIC_KEY or use --key", file=sys.stderr)
        return 1

    try:
        result = verify(public_key, args.token, assertion=args.assertion, footer=args.footer)
    except PasetoError as e:
        if args.json:
            print(json.dumps({"valid": False, "error": e.kind.value, "detail": e.detail}))
        else:
            print(f"INVALID ({e.kind.value}): {e.detail}")
        return 1

    if args.json:
        print(json.dumps({"valid": True, "payload": result.payload, "footer": result.footer}, indent=2))
    else:
        print("VALID")
        print(f"   Payload: {json.dumps(result.payload)}")
        if result.footer:
            print(f"   Footer:  {result.footer}")
    return 0


def cmd_footer(args: argparse.Namespace) -> int:
    """Print a token's footer without verifying it."""
    try:
        print(decode_footer(args.token))
    except PasetoError as e:
        print(f"Error: {e.kind.value}: {e.detail}", file=sys.stderr)
        return 1
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config.print_config()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vouch-paseto", description="Vouch PASETO CLI - v4.public token signing and verification"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # keygen command
    p_keygen = subparsers.add_parser("keygen", help="Generate a new Ed25519 key pair")
    p_keygen.add_argument("--env", action="store_true", help="Output as environment variables")
    p_keygen.add_argument("--jwk", action="store_true", help="Output as JWK JSON")

    # sign command
    p_sign = subparsers.add_parser("sign", help="Sign a message or JSON payload")
    p_sign.add_argument("message", help="The payload text (typically JSON)")
    p_sign.add_argument("--key", help="Secret key (k4.secret.)")
    p_sign.add_argument("--footer", default="", help="Footer text")
    p_sign.add_argument("--assertion", default="", help="Implicit assertion")

    # verify command
    p_verify = subparsers.add_parser("verify", help="Verify a token")
    p_verify.add_argument("token", help="The token to verify")
    p_verify.add_argument("--key", help="Public key (k4.public.)")
    p_verify.add_argument("--assertion", default="", help="Implicit assertion")
    p_verify.add_argument("--footer", default=None, help="Require this exact footer")
    p_verify.add_argument("--json", action="store_true", help="Output as JSON")

    # footer command
    p_footer = subparsers.add_parser("footer", help="Print a token's footer (unverified)")
    p_footer.add_argument("token", help="The token")

    subparsers.add_parser("config", help="Show effective configuration")

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    commands = {
        "keygen": cmd_keygen,
        "sign": cmd_sign,
        "verify": cmd_verify,
        "footer": cmd_footer,
        "config": cmd_config,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
