"""Cowsay service configuration."""

from __future__ import annotations

SERVICE_URL_ENV = "COWSAY_SERVICE_URL"
DEFAULT_SERVICE_URL = "https://github.com/MediaConduit/cowsay-service"
DEFAULT_BASE_URL = "http://localhost:80/"

DEFAULT_MODEL = "cowsay-default"
SUPPORTED_MODELS = ["cowsay-default"]

COWSAY_ENDPOINT = "/cowsay"
REQUEST_TIMEOUT = 30.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "SUPPORTED_MODELS",
    "COWSAY_ENDPOINT",
    "REQUEST_TIMEOUT",
]
