"""Chatterbox text-to-speech service configuration."""

from __future__ import annotations

from typing import List

SERVICE_URL_ENV = "CHATTERBOX_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/chatterbox-service"
DEFAULT_BASE_URL = "http://localhost:8004"

DEFAULT_MODEL = "chatterbox-tts"
SUPPORTED_MODELS: List[str] = ["chatterbox-tts"]

# Voice settings
DEFAULT_VOICE = "Abigail.wav"
PREDEFINED_VOICES: List[str] = ["Abigail.wav", "Emma.wav", "David.wav"]
DEFAULT_AUDIO_FORMAT = "mp3"
AVAILABLE_FORMATS: List[str] = ["mp3", "wav"]
MAX_TEXT_LENGTH = 5000

# API endpoints
TTS_ENDPOINT = "/tts"
REFERENCE_FILES_ENDPOINT = "/get_reference_files"
UPLOAD_REFERENCE_ENDPOINT = "/upload_reference"

REQUEST_TIMEOUT = 300.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "SUPPORTED_MODELS",
    "DEFAULT_VOICE",
    "PREDEFINED_VOICES",
    "DEFAULT_AUDIO_FORMAT",
    "AVAILABLE_FORMATS",
    "MAX_TEXT_LENGTH",
    "TTS_ENDPOINT",
    "REFERENCE_FILES_ENDPOINT",
    "UPLOAD_REFERENCE_ENDPOINT",
    "REQUEST_TIMEOUT",
]
