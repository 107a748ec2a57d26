"""Common environment helpers used across the backend."""

from __future__ import annotations

import os

from core.exceptions import ConfigurationError

__all__ = ["get_env", "get_bool_env"]

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def get_env(key: str, default: str | None = None, *, required: bool = False) -> str | None:
    """Return an environment variable and optionally enforce its presence.

    Empty strings are treated as unset so ``FOO_SERVICE_URL=`` falls back to
    the supplied default.
    """

    value = os.getenv(key)
    if value is None or not value.strip():
        value = default
    if required and value is None:
        raise ConfigurationError(f"Required environment variable {key} not set", key=key)
    return value


def get_bool_env(key: str, default: bool = False) -> bool:
    """Parse a boolean flag from the environment."""

    raw = get_env(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean environment variable value: {raw}", key=key)

