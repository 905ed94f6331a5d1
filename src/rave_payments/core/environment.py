"""
Resolution of the ``RAVE_*`` settings from the process environment.

Settings can come from :data:`os.environ`, a ``.env`` file, or explicit
overrides. The result is a read-only :class:`RaveEnvironment` that is handed
to :meth:`rave_payments.core.config.RaveConfig.from_mapping`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "RAVE_"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


@dataclass(frozen=True)
class RaveEnvironment:
    """A resolved snapshot of the variables used to configure the client."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def rave_variables(self) -> Dict[str, str]:
        """Only the ``RAVE_*`` entries, useful for diagnostics."""
        return {
            key: value
            for key, value in self.variables.items()
            if key.startswith(ENV_PREFIX)
        }


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> RaveEnvironment:
    """
    Layer ``base``, ``env_file`` and ``overrides`` into a :class:`RaveEnvironment`.

    ``base`` defaults to :data:`os.environ` and takes precedence over the file.
    Pass ``env_file=None`` to skip the file. ``overrides`` always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return RaveEnvironment(variables=merged)
