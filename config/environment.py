"""Environment detection and helpers."""

from __future__ import annotations

from typing import Literal

from core.utils.env import get_env

Environment = Literal["local", "development", "production", "test"]

_KNOWN_ENVIRONMENTS = ("local", "development", "production", "test")


def get_node_env() -> Environment:
    """Return the current runtime environment label."""

    raw = (get_env("NODE_ENV", default="local") or "local").strip().lower()
    if raw in _KNOWN_ENVIRONMENTS:
        return raw  # type: ignore[return-value]
    return "local"


ENVIRONMENT: Environment = get_node_env()
IS_LOCAL = ENVIRONMENT == "local"
IS_DEVELOPMENT = ENVIRONMENT == "development"
IS_PRODUCTION = ENVIRONMENT == "production"
IS_TEST = ENVIRONMENT == "test"

__all__ = [
    "Environment",
    "ENVIRONMENT",
    "IS_LOCAL",
    "IS_DEVELOPMENT",
    "IS_PRODUCTION",
    "IS_TEST",
    "get_node_env",
]
