"""FFMPEG provider: audio extraction, conversion and video filtering."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, List, Sequence, Tuple

from config.docker.providers import ffmpeg as ffmpeg_config
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import MediaResult, ProviderModel

logger = logging.getLogger(__name__)

_MODELS: Dict[str, Tuple[str, str, Tuple[MediaCapability, ...]]] = {
    "ffmpeg-video-to-audio": (
        "FFMPEG Video to Audio",
        "Extract audio from video using FFMPEG",
        (MediaCapability.VIDEO_TO_AUDIO,),
    ),
    "ffmpeg-audio-to-audio": (
        "FFMPEG Audio Converter",
        "Convert audio formats and apply audio processing using FFMPEG",
        (MediaCapability.AUDIO_TO_AUDIO,),
    ),
    "ffmpeg-video-filter": (
        "FFMPEG Video Filter",
        "Video filtering and effects using FFMPEG",
        (MediaCapability.VIDEO_TO_VIDEO, MediaCapability.VIDEO_TO_IMAGE),
    ),
}

# Options forwarded to the service as form fields
_FORM_OPTIONS = ("output_format", "sample_rate", "channels", "bitrate", "start_time", "duration", "filter")


class FFMPEGMediaModel(DockerMediaModel):
    """Upload a media file to the model's FFMPEG endpoint and return the processed bytes."""

    def __init__(self, *, endpoint: str, default_format: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.endpoint = endpoint
        self.default_format = default_format

    async def transform(self, input: Any, **options: Any) -> MediaResult:
        content = self.extract_bytes(input)
        filename = options.get("filename") or getattr(input, "filename", None) or "input"

        form: Dict[str, str] = {"output_format": self.default_format}
        for key in _FORM_OPTIONS:
            if options.get(key) is not None:
                form[key] = str(options[key])

        logger.info("Requesting FFMPEG %s (%d bytes, format=%s)", self.id, len(content), form["output_format"])
        response = await self.client.post_for_bytes(
            self.endpoint,
            data=form,
            files={"file": (filename, content)},
        )

        return MediaResult(
            content=response.content,
            content_type=response.headers.get("content-type", "application/octet-stream"),
            model=self.id,
            provider=self.provider,
            metadata={"output_format": form["output_format"], "input_size": len(content)},
        )


class FFMPEGDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "ffmpeg-docker"
    name: ClassVar[str] = "FFMPEG Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (
        MediaCapability.VIDEO_TO_AUDIO,
        MediaCapability.AUDIO_TO_AUDIO,
        MediaCapability.VIDEO_TO_VIDEO,
        MediaCapability.VIDEO_TO_IMAGE,
    )

    service_url_env = ffmpeg_config.SERVICE_URL_ENV
    default_service_url = ffmpeg_config.DEFAULT_SERVICE_URL
    default_base_url = ffmpeg_config.DEFAULT_BASE_URL
    request_timeout = ffmpeg_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        name, description, capabilities = _MODELS[model_id]
        return ProviderModel(id=model_id, name=name, capabilities=capabilities, description=description)

    def build_model(self, model_id: str) -> FFMPEGMediaModel:
        name, _, capabilities = _MODELS[model_id]
        default_format = (
            ffmpeg_config.DEFAULT_VIDEO_FORMAT
            if MediaCapability.VIDEO_TO_VIDEO in capabilities
            else ffmpeg_config.DEFAULT_AUDIO_FORMAT
        )
        return FFMPEGMediaModel(
            endpoint=ffmpeg_config.MODEL_ENDPOINTS[model_id],
            default_format=default_format,
            model_id=model_id,
            name=name,
            provider=self.id,
            capabilities=capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )


__all__ = ["FFMPEGDockerProvider", "FFMPEGMediaModel"]
