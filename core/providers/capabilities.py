"""Capability and provider type declarations."""

from __future__ import annotations

from enum import Enum

from core.exceptions import ValidationError


class MediaCapability(str, Enum):
    """What a model transforms, expressed as ``<input>-to-<output>``."""

    TEXT_TO_TEXT = "text-to-text"
    TEXT_TO_AUDIO = "text-to-audio"
    AUDIO_TO_TEXT = "audio-to-text"
    TEXT_TO_IMAGE = "text-to-image"
    TEXT_TO_VIDEO = "text-to-video"
    IMAGE_TO_VIDEO = "image-to-video"
    VIDEO_TO_VIDEO = "video-to-video"
    VIDEO_TO_IMAGE = "video-to-image"
    VIDEO_TO_AUDIO = "video-to-audio"
    AUDIO_TO_AUDIO = "audio-to-audio"


class ProviderType(str, Enum):
    """Where a provider runs its models."""

    LOCAL = "local"
    REMOTE = "remote"


def parse_capability(value: MediaCapability | str) -> MediaCapability:
    """Coerce an enum member, value (``text-to-text``) or name (``TEXT_TO_TEXT``)."""

    if isinstance(value, MediaCapability):
        return value

    normalized = str(value or "").strip()
    if not normalized:
        raise ValidationError("Capability cannot be empty", field="capability")

    lowered = normalized.lower().replace("_", "-")
    for capability in MediaCapability:
        if capability.value == lowered:
            return capability

    valid = ", ".join(capability.value for capability in MediaCapability)
    raise ValidationError(
        f"Unknown capability '{value}'. Expected one of: {valid}",
        field="capability",
    )


__all__ = ["MediaCapability", "ProviderType", "parse_capability"]
