"""Utility helpers shared across core packages."""

from .env import get_bool_env, get_env

__all__ = [
    "get_bool_env",
    "get_env",
]
