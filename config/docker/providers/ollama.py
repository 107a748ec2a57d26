"""Ollama text generation service configuration."""

from __future__ import annotations

from typing import List

SERVICE_URL_ENV = "OLLAMA_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/ollama-service"
DEFAULT_BASE_URL = "http://localhost:11434"

# Always advertised, even before the service reports installed models
DEFAULT_MODELS: List[str] = ["llama3.2:1b", "llama3.2:3b", "qwen2.5:0.5b"]

MODEL_CACHE_TTL_SECONDS = 300.0

TAGS_ENDPOINT = "/api/tags"
GENERATE_ENDPOINT = "/api/generate"
PULL_ENDPOINT = "/api/pull"

DEFAULT_TEMPERATURE = 0.7
REQUEST_TIMEOUT = 300.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODELS",
    "MODEL_CACHE_TTL_SECONDS",
    "TAGS_ENDPOINT",
    "GENERATE_ENDPOINT",
    "PULL_ENDPOINT",
    "DEFAULT_TEMPERATURE",
    "REQUEST_TIMEOUT",
]
