"""Providers backed by Docker-hosted media services."""

from core.providers.docker.chatterbox import ChatterboxDockerProvider, ChatterboxTextToAudioModel
from core.providers.docker.cowsay import CowsayDockerModel, CowsayDockerProvider
from core.providers.docker.ffmpeg import FFMPEGDockerProvider, FFMPEGMediaModel
from core.providers.docker.kokoro import KokoroDockerProvider, KokoroTextToAudioModel
from core.providers.docker.ollama import OllamaDockerProvider, OllamaTextToTextModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.docker.registry import ServiceRegistry, get_service_registry
from core.providers.docker.service import (
    ConfigurableDockerService,
    DockerService,
    ServiceInfo,
    ServiceStatus,
)
from core.providers.docker.whisper import WhisperDockerProvider, WhisperSpeechToTextModel
from core.providers.docker.zonos import ZonosDockerProvider, ZonosTextToAudioModel

DOCKER_PROVIDERS = (
    CowsayDockerProvider,
    ChatterboxDockerProvider,
    KokoroDockerProvider,
    ZonosDockerProvider,
    WhisperDockerProvider,
    OllamaDockerProvider,
    FFMPEGDockerProvider,
)

__all__ = [
    "AbstractDockerProvider",
    "ChatterboxDockerProvider",
    "ChatterboxTextToAudioModel",
    "ConfigurableDockerService",
    "CowsayDockerModel",
    "CowsayDockerProvider",
    "DOCKER_PROVIDERS",
    "DockerService",
    "FFMPEGDockerProvider",
    "FFMPEGMediaModel",
    "KokoroDockerProvider",
    "KokoroTextToAudioModel",
    "OllamaDockerProvider",
    "OllamaTextToTextModel",
    "ServiceInfo",
    "ServiceRegistry",
    "ServiceStatus",
    "WhisperDockerProvider",
    "WhisperSpeechToTextModel",
    "ZonosDockerProvider",
    "ZonosTextToAudioModel",
    "get_service_registry",
]
