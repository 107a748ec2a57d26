"""Defaults shared by Docker-backed providers."""

from __future__ import annotations

from typing import Dict, List

# Provider ids tried first when listing providers for a capability; the rest
# follow in registration order.
CAPABILITY_PRIORITY: Dict[str, List[str]] = {
    "text-to-audio": ["chatterbox-docker", "kokoro-docker", "zonos-docker"],
    "text-to-text": ["ollama-docker", "cowsay-docker-provider"],
    "audio-to-text": ["whisper-docker"],
}

# Upper bound for is_available() health waits
AVAILABILITY_TIMEOUT_SECONDS = 30.0

# Default HTTP timeout for calls into service containers
DEFAULT_REQUEST_TIMEOUT_SECONDS = 300.0

__all__ = [
    "CAPABILITY_PRIORITY",
    "AVAILABILITY_TIMEOUT_SECONDS",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
]
