"""Per-provider configuration modules for Docker-backed providers."""

from __future__ import annotations

from . import chatterbox, cowsay, ffmpeg, kokoro, ollama, whisper, zonos

__all__ = ["chatterbox", "cowsay", "ffmpeg", "kokoro", "ollama", "whisper", "zonos"]
