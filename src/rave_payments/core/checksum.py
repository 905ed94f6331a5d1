"""
Integrity checksums for Rave requests.

The checksum is the SHA-256 hex digest of the request's field values joined
in a fixed order, followed by the merchant secret key. The remote service
recomputes it from the submitted fields and rejects the request when the two
differ, so the order and the value formatting must match exactly.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .errors import ChecksumError, ConfigurationError

__all__ = [
    "INTEGRITY_HASH_FIELD",
    "PAYMENT_PAGE_FIELDS",
    "ChecksumGenerator",
    "PaymentPageRequest",
    "canonical_value",
]

INTEGRITY_HASH_FIELD = "integrity_hash"

# Byte order of the names, as published with the hosted payment page example.
PAYMENT_PAGE_FIELDS: Tuple[str, ...] = (
    "PBFPubKey",
    "amount",
    "country",
    "currency",
    "custom_description",
    "custom_logo",
    "custom_title",
    "customer_email",
    "customer_firstname",
    "customer_lastname",
    "customer_phone",
    "payment_method",
    "txref",
)

FieldValue = Union[str, int, float, Decimal, bool]


def canonical_value(value: FieldValue) -> str:
    """
    Render ``value`` the way the remote service does before hashing.

    Numbers use their plain decimal form: no exponent, no locale grouping,
    and integral floats lose their ``.0`` (``20.0`` hashes as ``20``).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ChecksumError(f"Cannot checksum non-finite number {value!r}")
        value = Decimal(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ChecksumError(f"Cannot checksum non-finite number {value!r}")
        if value == value.to_integral_value():
            return str(int(value))
        return format(value.normalize(), "f")
    raise ChecksumError(f"Unsupported checksum value type {type(value).__name__}")


@dataclass(frozen=True)
class PaymentPageRequest:
    """Parameters of a hosted payment page request, in checksum order."""

    PBFPubKey: str
    amount: Union[int, float, Decimal, str]
    country: str
    currency: str
    custom_description: str
    custom_logo: str
    custom_title: str
    customer_email: str
    customer_firstname: str
    customer_lastname: str
    customer_phone: str
    payment_method: str
    txref: str

    def as_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}

    def canonical_fields(self) -> List[Tuple[str, str]]:
        return [
            (name, canonical_value(getattr(self, name)))
            for name in PAYMENT_PAGE_FIELDS
        ]


ChecksumInput = Union[Mapping[str, Any], PaymentPageRequest]


class ChecksumGenerator:
    """
    Computes integrity checksums under a fixed secret key.

    ``field_order`` lists every field the request kind carries, in the order
    the remote service concatenates them. It defaults to the hosted payment
    page order; a mapping with any of these fields absent, or with a field
    not listed, is rejected.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        field_order: Sequence[str] = PAYMENT_PAGE_FIELDS,
    ) -> None:
        if not secret_key:
            raise ConfigurationError("A secret key is required to compute checksums")
        if len(set(field_order)) != len(field_order):
            raise ChecksumError("Checksum field order contains duplicates")
        self._secret_key = secret_key
        self.field_order: Tuple[str, ...] = tuple(field_order)

    def canonical_fields(self, data: ChecksumInput) -> List[Tuple[str, str]]:
        """Return the ordered ``(name, canonical value)`` pairs for ``data``."""
        if isinstance(data, PaymentPageRequest):
            data = data.as_dict()

        unexpected = sorted(
            name for name in data
            if name not in self.field_order and name != INTEGRITY_HASH_FIELD
        )
        if unexpected:
            raise ChecksumError(
                f"Fields not covered by the checksum order: {', '.join(unexpected)}"
            )

        pairs: List[Tuple[str, str]] = []
        for name in self.field_order:
            value = data.get(name)
            if value is None:
                raise ChecksumError(f'"{name}" is required to compute the checksum')
            pairs.append((name, canonical_value(value)))
        return pairs

    def _digest(self, pairs: Iterable[Tuple[str, str]]) -> str:
        hash_string = "".join(value for _, value in pairs) + self._secret_key
        return hashlib.sha256(hash_string.encode("utf-8")).hexdigest()

    def calculate(self, data: ChecksumInput) -> str:
        """Return the 64 character lowercase hex checksum of ``data``."""
        return self._digest(self.canonical_fields(data))

    def sign(self, data: ChecksumInput) -> Dict[str, Any]:
        """Return a copy of ``data`` with its checksum embedded."""
        payload = data.as_dict() if isinstance(data, PaymentPageRequest) else dict(data)
        payload.pop(INTEGRITY_HASH_FIELD, None)
        payload[INTEGRITY_HASH_FIELD] = self.calculate(payload)
        return payload
