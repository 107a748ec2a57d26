"""Defaults for resolving and probing Docker-hosted services."""

from __future__ import annotations

from pathlib import Path

from core.utils.env import get_env

# Descriptor shipped at the root of every service checkout
SERVICE_DESCRIPTOR_FILENAME = "MediaConduit.service.yml"

DEFAULT_GITHUB_REF = "main"

# Ports declared as 0 in a descriptor are replaced by one from this range
DYNAMIC_PORT_MIN = 30000
DYNAMIC_PORT_MAX = 40000

DEFAULT_HEALTH_PORT = 8080
HEALTH_CHECK_TIMEOUT_SECONDS = 5.0
HEALTH_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_WAIT_TIMEOUT_SECONDS = 120.0


def get_services_dir() -> Path:
    """Return the directory holding local service checkouts."""

    return Path(get_env("SERVICES_DIR", default="temp/services") or "temp/services")


__all__ = [
    "SERVICE_DESCRIPTOR_FILENAME",
    "DEFAULT_GITHUB_REF",
    "DYNAMIC_PORT_MIN",
    "DYNAMIC_PORT_MAX",
    "DEFAULT_HEALTH_PORT",
    "HEALTH_CHECK_TIMEOUT_SECONDS",
    "HEALTH_POLL_INTERVAL_SECONDS",
    "DEFAULT_WAIT_TIMEOUT_SECONDS",
    "get_services_dir",
]
