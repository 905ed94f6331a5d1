"""
Core primitives of the Rave client: configuration, card encryption,
integrity checksums and the HTTP client.
"""

from .checksum import (
    INTEGRITY_HASH_FIELD,
    PAYMENT_PAGE_FIELDS,
    ChecksumGenerator,
    PaymentPageRequest,
    canonical_value,
)
from .cipher import ALGORITHM, CardCipher, derive_key
from .client import RaveClient, charge_card
from .config import (
    LIVE_BASE_URL,
    SANDBOX_BASE_URL,
    RaveConfig,
    RaveParameters,
    load_rave_config,
)
from .environment import RaveEnvironment, build_environment
from .errors import (
    ChecksumError,
    ConfigurationError,
    EncryptionError,
    RaveAPIError,
    RaveError,
    RaveValidationError,
)
from .payloads import (
    REQUIRED_CHARGE_FIELDS,
    build_charge_payload,
    build_fees_payload,
    build_validate_charge_payload,
    build_verify_payload,
    build_xrequery_payload,
)

__all__ = [
    "ALGORITHM",
    "INTEGRITY_HASH_FIELD",
    "LIVE_BASE_URL",
    "PAYMENT_PAGE_FIELDS",
    "REQUIRED_CHARGE_FIELDS",
    "SANDBOX_BASE_URL",
    "CardCipher",
    "ChecksumError",
    "ChecksumGenerator",
    "ConfigurationError",
    "EncryptionError",
    "PaymentPageRequest",
    "RaveAPIError",
    "RaveClient",
    "RaveConfig",
    "RaveEnvironment",
    "RaveError",
    "RaveParameters",
    "RaveValidationError",
    "build_charge_payload",
    "build_environment",
    "build_fees_payload",
    "build_validate_charge_payload",
    "build_verify_payload",
    "build_xrequery_payload",
    "canonical_value",
    "charge_card",
    "derive_key",
    "load_rave_config",
]
