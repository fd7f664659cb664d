"""
Command-line interface for exercising the IDPay gateway operations.
"""

from __future__ import annotations

import argparse
import dataclasses
import enum
import json
import logging
import sys
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence, Tuple

import requests

from .api import create_gateway_client
from .core.client import GatewayClient, GatewayOutcome
from .core.config import ConfigError, load_gateway_config
from .core.models import DateRange, PaymentRequest, TransactionListQuery, TransactionQuery
from .core.responses import ResponseDecodeError
from .core.validation import ValidationError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _date_range(value: str) -> DateRange:
    if ":" not in value:
        raise argparse.ArgumentTypeError("Date ranges must look like MIN:MAX (epoch seconds)")
    low, high = value.split(":", 1)
    try:
        return DateRange(min=int(low), max=int(high))
    except (ValueError, ValidationError) as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dump(value: Any) -> str:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    return json.dumps(value, default=_to_jsonable, ensure_ascii=False, indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idpay-client",
        description="Call a single IDPay gateway endpoint",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing IDPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
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
        "--sandbox",
        action="store_true",
        default=None,
        help="Send the X-SANDBOX header (overrides IDPAY_SANDBOX)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a payment and print its link")
    create.add_argument("--order-id", required=True)
    create.add_argument("--amount", required=True, type=int, help="Amount in Rials")
    create.add_argument("--callback", required=True, help="Callback URL")
    create.add_argument("--description")
    create.add_argument("--name")
    create.add_argument("--phone")
    create.add_argument("--email")

    for name, help_text in (
        ("verify", "Verify a paid transaction"),
        ("inquire", "Show the current state of a transaction"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("--id", required=True, dest="transaction_id")
        sub.add_argument("--order-id", required=True)

    listing = commands.add_parser("list", help="List transactions")
    listing.add_argument("--page", type=int, default=0)
    listing.add_argument("--page-size", type=int, default=25)
    listing.add_argument("--id", dest="transaction_id")
    listing.add_argument("--order-id")
    listing.add_argument("--amount", type=int)
    listing.add_argument(
        "--status", type=int, action="append", default=None, dest="statuses"
    )
    listing.add_argument("--track-id")
    listing.add_argument("--card-no")
    listing.add_argument("--hashed-card-no")
    listing.add_argument("--payment-date", type=_date_range, metavar="MIN:MAX")
    listing.add_argument("--settlement-date", type=_date_range, metavar="MIN:MAX")
    return parser


def _call(client: GatewayClient, args: argparse.Namespace) -> GatewayOutcome[Any]:
    if args.command == "create":
        return client.request_payment(
            PaymentRequest(
                order_id=args.order_id,
                amount=args.amount,
                callback=args.callback,
                description=args.description,
                name=args.name,
                phone=args.phone,
                email=args.email,
            )
        )
    if args.command == "verify":
        return client.verify_transaction(TransactionQuery(args.transaction_id, args.order_id))
    if args.command == "inquire":
        return client.inquire_transaction(TransactionQuery(args.transaction_id, args.order_id))
    return client.list_transactions(
        TransactionListQuery(
            page=args.page,
            page_size=args.page_size,
            transaction_id=args.transaction_id,
            order_id=args.order_id,
            amount=args.amount,
            statuses=tuple(args.statuses or ()),
            track_id=args.track_id,
            card_no=args.card_no,
            hashed_card_no=args.hashed_card_no,
            payment_date=args.payment_date,
            settlement_date=args.settlement_date,
        )
    )


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_gateway_config(
            env_file=args.env_file, overrides=overrides, sandbox=args.sandbox
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config, session=requests.Session())

    try:
        outcome = _call(client, args)
    except ValidationError as exc:
        logging.error("Invalid request: %s", exc)
        return 1
    except requests.RequestException as exc:
        logging.error("Request to %s failed: %s", config.base_url, exc)
        return 1
    except ResponseDecodeError as exc:
        logging.error("Unreadable response from %s: %s", config.base_url, exc)
        return 1

    if outcome.error is not None:
        logging.error("Gateway rejected the request: %s", outcome.error.describe())
        print(_dump(outcome.error))
        return 1

    print(_dump(outcome.value))
    return 0


def main() -> None:
    sys.exit(run_cli())
