"""
Helpers for constructing the JSON bodies sent to the Rave API.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

from .cipher import CardCipher
from .config import RaveConfig
from .errors import RaveValidationError

__all__ = [
    "REQUIRED_CHARGE_FIELDS",
    "build_charge_payload",
    "build_fees_payload",
    "build_validate_charge_payload",
    "build_verify_payload",
    "build_xrequery_payload",
    "require_fields",
]

REQUIRED_CHARGE_FIELDS = (
    "cardno",
    "expirymonth",
    "expiryyear",
    "amount",
    "email",
    "txRef",
)


def require_fields(data: Mapping[str, Any], names: Iterable[str]) -> None:
    for name in names:
        value = data.get(name)
        if value is None or value == "":
            raise RaveValidationError.missing(name)


def _pick(data: Mapping[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    return {name: data[name] for name in names if data.get(name) is not None}


def build_charge_payload(
    config: RaveConfig,
    cipher: CardCipher,
    card: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Encrypt ``card`` into the body of a card charge request.

    The public key is added to the encrypted payload as well as the envelope.
    """
    require_fields(card, REQUIRED_CHARGE_FIELDS)
    client_payload = dict(card)
    client_payload["PBFPubKey"] = config.public_key
    return {
        "PBFPubKey": config.public_key,
        "client": cipher.encrypt_payload(client_payload),
        "alg": cipher.algorithm,
    }


def build_validate_charge_payload(
    config: RaveConfig,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    require_fields(data, ("transaction_reference", "otp"))
    return {
        "PBFPubKey": config.public_key,
        "transaction_reference": data["transaction_reference"],
        "otp": data["otp"],
    }


def build_verify_payload(config: RaveConfig, data: Mapping[str, Any]) -> Dict[str, Any]:
    require_fields(data, ("flw_ref",))
    payload = {"flw_ref": data["flw_ref"], "SECKEY": config.secret_key}
    payload.update(_pick(data, ("normalize", "currency", "amount")))
    return payload


def build_xrequery_payload(config: RaveConfig, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Either ``flw_ref`` or ``tx_ref`` identifies the transaction."""
    if not data.get("flw_ref") and not data.get("tx_ref"):
        raise RaveValidationError('Either "flw_ref" or "tx_ref" is required for this method')
    payload: Dict[str, Any] = {"SECKEY": config.secret_key}
    payload.update(
        _pick(data, ("flw_ref", "tx_ref", "last_attempt", "only_attempt", "currency", "amount"))
    )
    return payload


def build_fees_payload(config: RaveConfig, data: Mapping[str, Any]) -> Dict[str, Any]:
    require_fields(data, ("amount", "currency"))
    payload: Dict[str, Any] = {"PBFPubKey": config.public_key}
    payload.update(_pick(data, ("amount", "currency", "ptype", "card6")))
    return payload
