"""Kokoro text-to-speech service configuration."""

from __future__ import annotations

from typing import List

SERVICE_URL_ENV = "KOKORO_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/kokoro-service"
DEFAULT_BASE_URL = "http://localhost:8005"

SUPPORTED_MODELS: List[str] = ["kokoro-tts", "kokoro-82m", "kokoro-styletts2"]

DEFAULT_VOICE = "af_bella"
DEFAULT_AUDIO_FORMAT = "mp3"
DEFAULT_SPEED = 1.0

# OpenAI-compatible speech endpoint exposed by kokoro-fastapi
SPEECH_ENDPOINT = "/v1/audio/speech"
VOICES_ENDPOINT = "/v1/audio/voices"

REQUEST_TIMEOUT = 300.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "SUPPORTED_MODELS",
    "DEFAULT_VOICE",
    "DEFAULT_AUDIO_FORMAT",
    "DEFAULT_SPEED",
    "SPEECH_ENDPOINT",
    "VOICES_ENDPOINT",
    "REQUEST_TIMEOUT",
]
