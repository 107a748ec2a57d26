"""FFMPEG media processing service configuration."""

from __future__ import annotations

from typing import Dict

SERVICE_URL_ENV = "FFMPEG_SERVICE_URL"
DEFAULT_SERVICE_URL = "github:MediaConduit/ffmpeg-service"
DEFAULT_BASE_URL = "http://localhost:8006"

# model id -> service endpoint
MODEL_ENDPOINTS: Dict[str, str] = {
    "ffmpeg-video-to-audio": "/video/extract-audio",
    "ffmpeg-audio-to-audio": "/audio/convert",
    "ffmpeg-video-filter": "/video/filter",
}

DEFAULT_AUDIO_FORMAT = "mp3"
DEFAULT_VIDEO_FORMAT = "mp4"

REQUEST_TIMEOUT = 600.0

__all__ = [
    "SERVICE_URL_ENV",
    "DEFAULT_SERVICE_URL",
    "DEFAULT_BASE_URL",
    "MODEL_ENDPOINTS",
    "DEFAULT_AUDIO_FORMAT",
    "DEFAULT_VIDEO_FORMAT",
    "REQUEST_TIMEOUT",
]
