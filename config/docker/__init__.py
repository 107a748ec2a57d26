"""Docker provider configuration."""

from __future__ import annotations

from .defaults import (
    AVAILABILITY_TIMEOUT_SECONDS,
    CAPABILITY_PRIORITY,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from . import providers

__all__ = [
    "AVAILABILITY_TIMEOUT_SECONDS",
    "CAPABILITY_PRIORITY",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "providers",
]
