"""Zonos text-to-speech service configuration."""

from __future__ import annotations

from typing import Dict, List

SERVICE_URL_ENV = "ZONOS_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/zonos-service"
DEFAULT_BASE_URL = "http://localhost:7860"

SUPPORTED_MODELS: List[str] = ["zonos-tts", "zonos-docker-tts", "zonos-styletts2"]

DEFAULT_MODEL_CHOICE = "Zyphra/Zonos-v0.1-transformer"
MODEL_CHOICES: List[str] = ["Zyphra/Zonos-v0.1-transformer", "Zyphra/Zonos-v0.1-hybrid"]
DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES: List[str] = ["en", "es", "fr", "de", "it", "pt", "ru", "ja", "ko", "zh"]
DEFAULT_VOICE = "default"
AVAILABLE_VOICES: List[str] = ["default", "male", "female", "child", "elderly"]
DEFAULT_AUDIO_FORMAT = "wav"
MAX_TEXT_LENGTH = 10000

MODEL_PARAMETERS: Dict[str, Dict[str, object]] = {
    "speed": {"type": "number", "default": 1.0, "range": [0.5, 2.0]},
    "pitch": {"type": "number", "default": 0, "range": [-12, 12]},
    "voice": {"type": "string", "default": DEFAULT_VOICE},
}

TTS_ENDPOINT = "/tts"
REQUEST_TIMEOUT = 300.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "SUPPORTED_MODELS",
    "DEFAULT_MODEL_CHOICE",
    "MODEL_CHOICES",
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_VOICE",
    "AVAILABLE_VOICES",
    "DEFAULT_AUDIO_FORMAT",
    "MAX_TEXT_LENGTH",
    "MODEL_PARAMETERS",
    "TTS_ENDPOINT",
    "REQUEST_TIMEOUT",
]
