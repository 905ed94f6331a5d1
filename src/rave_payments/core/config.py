"""
Configuration objects and helpers for the Rave client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigurationError

__all__ = [
    "LIVE_BASE_URL",
    "SANDBOX_BASE_URL",
    "RaveConfig",
    "RaveParameters",
    "load_rave_config",
]

LIVE_BASE_URL = "https://api.ravepay.co"
SANDBOX_BASE_URL = "https://ravesandboxapi.flutterwave.com"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})

_PARAMETER_TO_ENV_KEY = {
    "public_key": "RAVE_PUBKEY",
    "secret_key": "RAVE_SECKEY",
    "live": "RAVE_LIVE",
    "base_url": "RAVE_BASE_URL",
    "timeout_seconds": "RAVE_TIMEOUT_SECONDS",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class RaveParameters:
    """
    Explicit parameter bundle for constructing :class:`RaveConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_rave_config`.
    """

    public_key: Optional[str] = None
    secret_key: Optional[str] = None
    live: Optional[bool | str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        raise ConfigurationError(f"{key} must be provided")
    return raw.strip()


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{key} must be a boolean flag, got '{raw}'")


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"RAVE_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigurationError("RAVE_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class RaveConfig:
    public_key: str
    secret_key: str
    live: bool = False
    base_url: str = SANDBOX_BASE_URL
    timeout_seconds: float = 30.0

    def __repr__(self) -> str:
        return (
            f"RaveConfig(public_key={self.public_key!r}, secret_key='***', "
            f"live={self.live!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "RaveConfig":
        public_key = _require(values, "RAVE_PUBKEY")
        secret_key = _require(values, "RAVE_SECKEY")

        live = _parse_bool(values.get("RAVE_LIVE", "false"), "RAVE_LIVE")
        default_url = LIVE_BASE_URL if live else SANDBOX_BASE_URL
        base_url = (values.get("RAVE_BASE_URL") or default_url).strip().rstrip("/")

        timeout_seconds = _parse_timeout(values.get("RAVE_TIMEOUT_SECONDS", "30"))

        return cls(
            public_key=public_key,
            secret_key=secret_key,
            live=live,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[RaveParameters] = None,
        public_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        live: Optional[bool | str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "RaveConfig":
        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())
        merged_overrides.update(
            RaveParameters(
                public_key=public_key,
                secret_key=secret_key,
                live=live,
                base_url=base_url,
                timeout_seconds=timeout_seconds,
            ).as_overrides()
        )

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_rave_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[RaveParameters] = None,
    public_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    live: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> RaveConfig:
    """
    Convenience wrapper that mirrors :meth:`RaveConfig.from_env`.

    The keys can be provided through environment variables, a ``.env`` file,
    direct keyword arguments, or any combination of the three.
    """
    return RaveConfig.from_env(
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
