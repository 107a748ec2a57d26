"""Whisper speech-to-text service configuration."""

from __future__ import annotations

from typing import List

SERVICE_URL_ENV = "WHISPER_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/whisper-service"
DEFAULT_BASE_URL = "http://localhost:9000"

SUPPORTED_MODELS: List[str] = [
    "whisper-tiny",
    "whisper-base",
    "whisper-small",
    "whisper-medium",
    "whisper-large",
]

# whisper-asr-webservice transcription endpoint
TRANSCRIBE_ENDPOINT = "/asr"
DEFAULT_TASK = "transcribe"
DEFAULT_OUTPUT = "json"

REQUEST_TIMEOUT = 600.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "SUPPORTED_MODELS",
    "TRANSCRIBE_ENDPOINT",
    "DEFAULT_TASK",
    "DEFAULT_OUTPUT",
    "REQUEST_TIMEOUT",
]
