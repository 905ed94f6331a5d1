"""
Exception hierarchy for the Rave client.

Everything raised on purpose by this package derives from :class:`RaveError`,
so callers can abort request construction with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "ChecksumError",
    "ConfigurationError",
    "EncryptionError",
    "RaveAPIError",
    "RaveError",
    "RaveValidationError",
]


class RaveError(Exception):
    """Base class for all errors raised by :mod:`rave_payments`."""


class ConfigurationError(RaveError):
    """Raised when the supplied configuration is missing or invalid."""


class EncryptionError(RaveError):
    """Raised when the card cipher cannot derive its key or run the cipher."""


class ChecksumError(RaveError):
    """Raised when a request cannot be put into its canonical checksum form."""


class RaveValidationError(RaveError):
    """Raised when a request is missing parameters the endpoint requires."""

    @classmethod
    def missing(cls, name: str) -> "RaveValidationError":
        return cls(f'"{name}" is a required parameter for this method')


class RaveAPIError(RaveError):
    """
    The Rave API answered with an error.

    ``str(error)`` mirrors the message reported by the API followed by the
    HTTP status, e.g. ``"cvv is required Status Code: 400"``.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response = response
        if status_code is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} Status Code: {status_code}")
