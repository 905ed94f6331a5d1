"""
HTTP client for the Rave API.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from .checksum import ChecksumGenerator, ChecksumInput
from .cipher import CardCipher
from .config import RaveConfig
from .errors import RaveAPIError, RaveValidationError
from .payloads import (
    build_charge_payload,
    build_fees_payload,
    build_validate_charge_payload,
    build_verify_payload,
    build_xrequery_payload,
)

__all__ = [
    "BANKS_PATH",
    "CHARGE_PATH",
    "FEES_PATH",
    "RaveClient",
    "VALIDATE_CHARGE_PATH",
    "VERIFY_PATH",
    "XREQUERY_PATH",
    "charge_card",
]

_API_ROOT = "flwv3-pug/getpaidx/api"

CHARGE_PATH = f"{_API_ROOT}/charge"
VALIDATE_CHARGE_PATH = f"{_API_ROOT}/validatecharge"
VERIFY_PATH = f"{_API_ROOT}/verify"
XREQUERY_PATH = f"{_API_ROOT}/xrequery"
FEES_PATH = f"{_API_ROOT}/fee"
BANKS_PATH = f"{_API_ROOT}/flwpbf-banks.js?json=1"


def _decode(response: requests.Response, url: str) -> Any:
    try:
        payload = response.json()
    except ValueError as exc:
        if response.status_code >= 400:
            raise RaveAPIError(
                response.text or response.reason or "Request failed",
                status_code=response.status_code,
            ) from exc
        raise RaveAPIError(
            f"Failed to parse JSON from Rave at {url}: {response.text}",
            status_code=response.status_code,
        ) from exc

    failed = isinstance(payload, dict) and payload.get("status") == "error"
    if response.status_code >= 400 or failed:
        message = payload.get("message") if isinstance(payload, dict) else None
        raise RaveAPIError(
            message or json.dumps(payload),
            status_code=response.status_code,
            response=payload,
        )
    return payload


def _post_json(
    session: requests.Session,
    config: RaveConfig,
    path: str,
    body: Dict[str, Any],
) -> Dict[str, Any]:
    url = config.endpoint(path)
    response = session.post(url, json=body, timeout=config.timeout_seconds)
    return _decode(response, url)


def _get_json(session: requests.Session, config: RaveConfig, path: str) -> Any:
    url = config.endpoint(path)
    response = session.get(url, timeout=config.timeout_seconds)
    return _decode(response, url)


def _suggested_auth(response: Mapping[str, Any]) -> Optional[str]:
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    value = data.get("suggested_auth")
    return str(value).upper() if value else None


class RaveClient:
    """
    Thin convenience wrapper around the Rave endpoints.

    The card cipher and checksum generator are built from ``config`` when the
    client is created, so an unusable secret key fails early.
    """

    def __init__(
        self,
        config: RaveConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.cipher = CardCipher(config.secret_key)
        self.checksum = ChecksumGenerator(config.secret_key)

    def encrypt(self, plaintext: str) -> str:
        return self.cipher.encrypt(plaintext)

    def integrity_checksum(self, data: ChecksumInput) -> str:
        return self.checksum.calculate(data)

    def charge_card(self, card: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Charge a card.

        When Rave answers that the card needs PIN authorization, the charge
        is sent again with ``suggested_auth`` set, which requires ``pin``.
        """
        url = self.config.endpoint(CHARGE_PATH)
        logging.info("Submitting card charge to %s", url)
        response = _post_json(
            self.session,
            self.config,
            CHARGE_PATH,
            build_charge_payload(self.config, self.cipher, card),
        )

        if _suggested_auth(response) != "PIN":
            return response

        if not card.get("pin"):
            raise RaveValidationError.missing("pin")

        logging.info("Rave requested PIN authorization; resubmitting charge to %s", url)
        card_with_auth = dict(card)
        card_with_auth["suggested_auth"] = "PIN"
        return _post_json(
            self.session,
            self.config,
            CHARGE_PATH,
            build_charge_payload(self.config, self.cipher, card_with_auth),
        )

    def validate_charge(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Complete a pending charge with the OTP sent to the customer."""
        logging.info("Submitting charge validation to %s", self.config.endpoint(VALIDATE_CHARGE_PATH))
        return _post_json(
            self.session,
            self.config,
            VALIDATE_CHARGE_PATH,
            build_validate_charge_payload(self.config, data),
        )

    def verify_transaction(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        logging.info("Verifying transaction at %s", self.config.endpoint(VERIFY_PATH))
        return _post_json(
            self.session,
            self.config,
            VERIFY_PATH,
            build_verify_payload(self.config, data),
        )

    def xrequery_transaction(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        logging.info("Requerying transaction at %s", self.config.endpoint(XREQUERY_PATH))
        return _post_json(
            self.session,
            self.config,
            XREQUERY_PATH,
            build_xrequery_payload(self.config, data),
        )

    def get_fees(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        logging.info("Requesting fees from %s", self.config.endpoint(FEES_PATH))
        return _post_json(
            self.session,
            self.config,
            FEES_PATH,
            build_fees_payload(self.config, data),
        )

    def list_banks(self) -> List[Dict[str, Any]]:
        """Return the banks that support account charges."""
        logging.info("Listing banks from %s", self.config.endpoint(BANKS_PATH))
        banks = _get_json(self.session, self.config, BANKS_PATH)
        if not isinstance(banks, list):
            raise RaveAPIError(f"Unexpected bank list response: {banks!r}", response=banks)
        return banks


def charge_card(
    config: RaveConfig,
    card: Mapping[str, Any],
    *,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    High-level helper that charges ``card`` with a one-off client.
    """
    client = RaveClient(config, session=session)
    return client.charge_card(card)
