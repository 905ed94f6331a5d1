"""
Public facade for the Rave payment client.

The module re-exports the most useful pieces for integrators so they can
``from rave_payments import ...`` without navigating the package.
"""

from .api import (
    calculate_integrity_checksum,
    create_rave_client,
    encrypt_card_payload,
    encrypt_text,
)
from .core import (
    ChecksumError,
    ChecksumGenerator,
    CardCipher,
    ConfigurationError,
    EncryptionError,
    PaymentPageRequest,
    RaveAPIError,
    RaveClient,
    RaveConfig,
    RaveEnvironment,
    RaveError,
    RaveParameters,
    RaveValidationError,
    build_environment,
    charge_card,
    derive_key,
    load_rave_config,
)

__version__ = "0.1.0"

__all__ = (
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
    "build_environment",
    "calculate_integrity_checksum",
    "charge_card",
    "create_rave_client",
    "derive_key",
    "encrypt_card_payload",
    "encrypt_text",
    "load_rave_config",
)
