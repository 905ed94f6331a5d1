"""
Minimal script that charges a sandbox test card through the public API.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rave_payments import (
    ConfigurationError,
    RaveAPIError,
    RaveValidationError,
    create_rave_client,
    load_rave_config,
)

TEST_MASTERCARD = {
    "cardno": "5438898014560229",
    "cvv": "789",
    "expirymonth": "09",
    "expiryyear": "19",
    "pin": "3310",
    "currency": "NGN",
    "country": "NG",
    "amount": "300",
    "email": "tester@flutter.co",
    "IP": "103.238.105.185",
    "txRef": "MXX-ASC-4578",
    "device_fingerprint": "69e6b7f0sb72037aa8428b70fbe03986c",
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Charge a Rave sandbox test card")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing RAVE_PUBKEY and RAVE_SECKEY",
    )
    parser.add_argument(
        "--otp",
        help="Validate the charge with this OTP once Rave asks for it (sandbox: 12345)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_rave_config(env_file=args.env_file)
    except ConfigurationError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_rave_client(config=config)
    logging.info("Charging test card against %s", config.base_url)

    try:
        response = client.charge_card(TEST_MASTERCARD)
    except (RaveAPIError, RaveValidationError) as exc:
        logging.error("Charge failed: %s", exc)
        return 1

    data = response.get("data") or {}
    flw_ref = data.get("flwRef")
    logging.info("Charge accepted (auth model %s, reference %s)", data.get("authModelUsed"), flw_ref)

    if not args.otp or not flw_ref:
        return 0

    try:
        validation = client.validate_charge(
            {"transaction_reference": flw_ref, "otp": args.otp}
        )
        verification = client.verify_transaction(
            {"flw_ref": flw_ref, "normalize": "1", "currency": data.get("currency")}
        )
    except (RaveAPIError, RaveValidationError) as exc:
        logging.error("Validation failed: %s", exc)
        return 1

    logging.info("Validation: %s", validation.get("message"))
    logging.info("Verification: %s", verification.get("message"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
