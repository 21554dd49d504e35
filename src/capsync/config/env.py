"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def _read(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return every named variable, or raise naming all that are unset or blank."""

    values = {name: _read(name) for name in names}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]


def env_flag(name: str, *, default: bool = False) -> bool:
    """Read a boolean switch such as ``FOO=1`` or ``FOO=false``.

    Blank or unset variables yield ``default``; anything unrecognised is a
    configuration error rather than a silent fallback.
    """

    value = _read(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise InvalidConfigurationError(name, value, expected="one of 1/0, true/false, yes/no, on/off")
