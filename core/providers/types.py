"""Value objects describing providers, models and generation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from core.providers.capabilities import MediaCapability

HealthStatus = Literal["healthy", "unhealthy"]


@dataclass(frozen=True, slots=True)
class ProviderModel:
    """Immutable descriptor of a model a provider can build."""

    id: str
    name: str
    capabilities: Tuple[MediaCapability, ...]
    description: Optional[str] = None
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def supports(self, capability: MediaCapability) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "capabilities": [capability.value for capability in self.capabilities],
            "description": self.description,
            "parameters": dict(self.parameters),
        }


@dataclass(slots=True)
class ProviderHealth:
    """Snapshot returned by ``get_health``."""

    status: HealthStatus
    uptime_seconds: float
    active_jobs: int = 0
    queued_jobs: int = 0
    last_error: Optional[str] = None


@dataclass(slots=True)
class TextResult:
    """Normalised text response returned by text-producing models."""

    text: str
    model: str
    provider: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class AudioResult:
    """Normalised audio response returned by speech models."""

    audio_bytes: bytes
    format: str
    model: str
    provider: str
    voice: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MediaResult:
    """Binary media payload returned by processing models (ffmpeg)."""

    content: bytes
    content_type: str
    model: str
    provider: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


__all__ = [
    "AudioResult",
    "HealthStatus",
    "MediaResult",
    "ProviderHealth",
    "ProviderModel",
    "TextResult",
]
