"""Whisper provider: speech-to-text via whisper-asr-webservice."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, List, Sequence

from config.docker.providers import whisper as whisper_config
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import ProviderModel, TextResult

logger = logging.getLogger(__name__)


class WhisperSpeechToTextModel(DockerMediaModel):
    """Transcribe or translate audio.

    ``input`` is raw audio bytes or an object exposing ``data`` (and
    optionally ``filename``). Options: ``language``, ``task``
    (``transcribe``/``translate``), ``filename``.
    """

    async def transform(self, input: Any, **options: Any) -> TextResult:
        audio_bytes = self.extract_bytes(input)
        filename = options.get("filename") or getattr(input, "filename", None) or "audio.wav"

        params: Dict[str, Any] = {
            "task": options.get("task") or whisper_config.DEFAULT_TASK,
            "output": whisper_config.DEFAULT_OUTPUT,
            "encode": "true",
        }
        if options.get("language"):
            params["language"] = options["language"]

        logger.info("Requesting Whisper transcription (model=%s bytes=%d)", self.id, len(audio_bytes))
        response = await self.client.request(
            "POST",
            whisper_config.TRANSCRIBE_ENDPOINT,
            params=params,
            files={"audio_file": (filename, audio_bytes)},
        )
        data = self.client.decode_json(response, whisper_config.TRANSCRIBE_ENDPOINT)

        return TextResult(
            text=str(data.get("text", "")).strip(),
            model=self.id,
            provider=self.provider,
            metadata={
                "language": data.get("language"),
                "segments": data.get("segments", []),
                "task": params["task"],
            },
        )


class WhisperDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "whisper-docker"
    name: ClassVar[str] = "Whisper Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.AUDIO_TO_TEXT,)

    service_url_env = whisper_config.SERVICE_URL_ENV
    default_service_url = whisper_config.DEFAULT_SERVICE_URL
    default_base_url = whisper_config.DEFAULT_BASE_URL
    request_timeout = whisper_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(whisper_config.SUPPORTED_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        size = model_id.removeprefix("whisper-")
        return ProviderModel(
            id=model_id,
            name=f"Whisper {size.capitalize()}",
            capabilities=(MediaCapability.AUDIO_TO_TEXT,),
            description=f"OpenAI Whisper {size} speech recognition",
            parameters={"language": {"type": "string"}, "task": {"enum": ["transcribe", "translate"]}},
        )

    def build_model(self, model_id: str) -> WhisperSpeechToTextModel:
        return WhisperSpeechToTextModel(
            model_id=model_id,
            name=self.describe_model(model_id).name,
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )


__all__ = ["WhisperDockerProvider", "WhisperSpeechToTextModel"]
