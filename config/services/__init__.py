"""Service registry configuration."""

from __future__ import annotations

from .defaults import (
    DEFAULT_GITHUB_REF,
    DEFAULT_HEALTH_PORT,
    DEFAULT_WAIT_TIMEOUT_SECONDS,
    DYNAMIC_PORT_MAX,
    DYNAMIC_PORT_MIN,
    HEALTH_CHECK_TIMEOUT_SECONDS,
    HEALTH_POLL_INTERVAL_SECONDS,
    SERVICE_DESCRIPTOR_FILENAME,
    get_services_dir,
)

__all__ = [
    "DEFAULT_GITHUB_REF",
    "DEFAULT_HEALTH_PORT",
    "DEFAULT_WAIT_TIMEOUT_SECONDS",
    "DYNAMIC_PORT_MAX",
    "DYNAMIC_PORT_MIN",
    "HEALTH_CHECK_TIMEOUT_SECONDS",
    "HEALTH_POLL_INTERVAL_SECONDS",
    "SERVICE_DESCRIPTOR_FILENAME",
    "get_services_dir",
]
