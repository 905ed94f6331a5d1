"""
Command-line interface for exercising the Rave client.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import (
    calculate_integrity_checksum,
    create_rave_client,
    encrypt_card_payload,
    encrypt_text,
)
from .core.config import load_rave_config
from .core.environment import build_environment
from .core.errors import ConfigurationError, RaveError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def _echo(result: Any) -> None:
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=2, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rave-payments",
        description="Encrypt card data, compute checksums and call the Rave API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing RAVE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Use the live API instead of the sandbox",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    encrypt = commands.add_parser("encrypt", help="Encrypt text with the card cipher")
    encrypt.add_argument("text", help="Plaintext to encrypt")
    encrypt.add_argument(
        "--json",
        action="store_true",
        help="Treat TEXT as a JSON card payload and encrypt its compact form",
    )

    checksum = commands.add_parser(
        "checksum", help="Compute the integrity checksum of a payment page request"
    )
    checksum.add_argument(
        "fields",
        nargs="+",
        type=_key_value,
        metavar="KEY=VALUE",
        help="Request field",
    )

    commands.add_parser("banks", help="List the banks that support account charges")

    fees = commands.add_parser("fees", help="Look up the fee for an amount")
    fees.add_argument("--amount", required=True)
    fees.add_argument("--currency", default="NGN")

    verify = commands.add_parser("verify", help="Verify a transaction by reference")
    verify.add_argument("--flw-ref", required=True)
    return parser


def _run_offline(args: argparse.Namespace, variables: dict[str, str]) -> Any:
    if args.command == "encrypt":
        if args.json:
            try:
                card = json.loads(args.text)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"TEXT is not valid JSON: {exc}") from exc
            return encrypt_card_payload(card, env_file=None, base=variables)
        return encrypt_text(args.text, env_file=None, base=variables)

    return calculate_integrity_checksum(
        _collect_pairs(args.fields), env_file=None, base=variables
    )


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())

    if args.command in ("encrypt", "checksum"):
        environment = build_environment(env_file=args.env_file, overrides=overrides)
        logging.debug(
            "Resolved settings: %s", ", ".join(sorted(environment.rave_variables()))
        )
        try:
            _echo(_run_offline(args, dict(environment.variables)))
        except RaveError as exc:
            logging.error("%s failed: %s", args.command, exc)
            return 1
        return 0

    try:
        config = load_rave_config(
            env_file=args.env_file,
            overrides=overrides,
            live=True if args.live else None,
        )
        client = create_rave_client(config=config, session=requests.Session())
    except (RaveError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        if args.command == "banks":
            result: Any = client.list_banks()
        elif args.command == "fees":
            result = client.get_fees({"amount": args.amount, "currency": args.currency})
        else:
            result = client.verify_transaction({"flw_ref": args.flw_ref})
    except (RaveError, requests.RequestException) as exc:
        logging.error("%s request failed: %s", args.command, exc)
        return 1

    _echo(result)
    return 0
