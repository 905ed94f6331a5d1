"""
Public, high-level helpers for interacting with the Rave API.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .core.checksum import ChecksumGenerator, ChecksumInput
from .core.cipher import CardCipher
from .core.client import RaveClient
from .core.config import RaveConfig, RaveParameters, load_rave_config
from .core.environment import build_environment
from .core.errors import ConfigurationError

__all__ = [
    "calculate_integrity_checksum",
    "create_rave_client",
    "encrypt_card_payload",
    "encrypt_text",
]


def _resolve_secret_key(
    secret_key: Optional[str],
    config: Optional[RaveConfig],
    env_file: Optional[str],
    base: Optional[Mapping[str, str]],
) -> str:
    if secret_key is not None and config is not None:
        raise ValueError("Provide either a secret key or a RaveConfig, not both.")
    if config is not None:
        return config.secret_key
    if secret_key is None:
        secret_key = build_environment(env_file=env_file, base=base).get("RAVE_SECKEY")
    if not secret_key or not secret_key.strip():
        raise ConfigurationError("RAVE_SECKEY must be provided")
    return secret_key.strip()


def create_rave_client(
    *,
    config: Optional[RaveConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[RaveParameters] = None,
    public_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    live: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> RaveClient:
    """
    Construct a :class:`RaveClient`.

    Callers can either supply a ready-made :class:`RaveConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            public_key,
            secret_key,
            live,
            base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built RaveConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_rave_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            public_key=public_key,
            secret_key=secret_key,
            live=live,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )
    return RaveClient(cfg, session=session)


def calculate_integrity_checksum(
    data: ChecksumInput,
    *,
    secret_key: Optional[str] = None,
    config: Optional[RaveConfig] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Return the integrity checksum of a hosted payment page request.

    Without ``secret_key`` or ``config`` the key is read from ``RAVE_SECKEY``.
    """
    key = _resolve_secret_key(secret_key, config, env_file, base)
    return ChecksumGenerator(key).calculate(data)


def encrypt_card_payload(
    card: Mapping[str, Any],
    *,
    secret_key: Optional[str] = None,
    config: Optional[RaveConfig] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
) -> str:
    """Encrypt ``card`` into the value Rave expects in the ``client`` field."""
    key = _resolve_secret_key(secret_key, config, env_file, base)
    return CardCipher(key).encrypt_payload(card)


def encrypt_text(
    plaintext: str,
    *,
    secret_key: Optional[str] = None,
    config: Optional[RaveConfig] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
) -> str:
    """Encrypt ``plaintext`` with the card cipher, resolving the key like the client."""
    key = _resolve_secret_key(secret_key, config, env_file, base)
    return CardCipher(key).encrypt(plaintext)
