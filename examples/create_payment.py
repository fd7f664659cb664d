"""
Minimal script that uses the public API to create an IDPay payment and,
optionally, verify it once the payer has come back to the callback.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Tuple

from idpay_client import (
    ConfigError,
    ErrorKind,
    PaymentRequest,
    TransactionQuery,
    ValidationError,
    create_gateway_client,
    load_gateway_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an IDPay payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing IDPAY_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--api-key", help="Provide the API key without relying on environment data")
    parser.add_argument("--sandbox", action="store_true", help="Use the gateway's sandbox mode")
    parser.add_argument("--order-id", required=True, help="Merchant order identifier")
    parser.add_argument("--amount", type=int, help="Amount in Rials")
    parser.add_argument("--callback", help="Where the payer is sent afterwards")
    parser.add_argument("--description", help="Free-text description shown to the payer")
    parser.add_argument("--name", help="Payer name")
    parser.add_argument("--phone", help="Payer mobile number")
    parser.add_argument("--email", help="Payer email address")
    parser.add_argument(
        "--verify-id",
        help="Instead of creating a payment, verify the transaction with this id",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    overrides = _build_overrides(args.set or ())

    try:
        config = load_gateway_config(
            env_file=args.env_file,
            overrides=overrides,
            api_key=args.api_key,
            sandbox=True if args.sandbox else None,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)

    if args.verify_id:
        outcome = client.verify_transaction(TransactionQuery(args.verify_id, args.order_id))
        if not outcome.ok:
            logging.error("Verification failed: %s", outcome.error.describe())
            return 1
        record = outcome.value
        logging.info("Transaction %s verified with status %s", record.id, record.status)
        return 0

    try:
        request = PaymentRequest(
            order_id=args.order_id,
            amount=args.amount,
            callback=args.callback,
            description=args.description,
            name=args.name,
            phone=args.phone,
            email=args.email,
        )
    except ValidationError as exc:
        logging.error("Invalid payment request: %s", exc)
        return 1

    logging.info("Requesting payment of %s Rials for order %s", request.amount, request.order_id)
    outcome = client.request_payment(request)

    if outcome.ok:
        logging.info("Send the payer to %s", outcome.value.payment_link)
        return 0

    error = outcome.error
    if getattr(error, "kind", None) is ErrorKind.AMOUNT_LESS_THAN_MINIMUM:
        logging.error("The gateway requires at least %s Rials", error.minimum_amount)
    else:
        logging.error("Payment request rejected: %s", error.describe())
    return 1


if __name__ == "__main__":
    sys.exit(main())
