"""Kokoro provider: text-to-speech via the OpenAI-compatible kokoro server."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, List, Sequence

from config.docker.providers import kokoro as kokoro_config
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import AudioResult, ProviderModel

logger = logging.getLogger(__name__)

_MODEL_NAMES: Dict[str, str] = {
    "kokoro-tts": "Kokoro TTS",
    "kokoro-82m": "Kokoro 82M",
    "kokoro-styletts2": "Kokoro StyleTTS2",
}


class KokoroTextToAudioModel(DockerMediaModel):
    async def transform(self, input: Any, **options: Any) -> AudioResult:
        text = self.extract_text(input)
        voice = options.get("voice") or kokoro_config.DEFAULT_VOICE
        audio_format = str(options.get("format") or kokoro_config.DEFAULT_AUDIO_FORMAT).lower()
        speed = float(options.get("speed") or kokoro_config.DEFAULT_SPEED)

        payload = {
            "model": "kokoro",
            "input": text,
            "voice": voice,
            "response_format": audio_format,
            "speed": speed,
        }
        logger.info("Requesting Kokoro TTS (model=%s voice=%s format=%s)", self.id, voice, audio_format)
        response = await self.client.post_for_bytes(kokoro_config.SPEECH_ENDPOINT, json=payload)

        return AudioResult(
            audio_bytes=response.content,
            format=audio_format,
            model=self.id,
            provider=self.provider,
            voice=voice,
            metadata={"speed": speed, "text_length": len(text)},
        )

    async def list_voices(self) -> List[str]:
        data = await self.client.get_json(kokoro_config.VOICES_ENDPOINT)
        voices = data.get("voices", []) if isinstance(data, dict) else data
        return [str(voice) for voice in voices or []]


class KokoroDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "kokoro-docker"
    name: ClassVar[str] = "Kokoro Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.TEXT_TO_AUDIO,)

    service_url_env = kokoro_config.SERVICE_URL_ENV
    default_service_url = kokoro_config.DEFAULT_SERVICE_URL
    default_base_url = kokoro_config.DEFAULT_BASE_URL
    request_timeout = kokoro_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(kokoro_config.SUPPORTED_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(
            id=model_id,
            name=_MODEL_NAMES.get(model_id, model_id),
            capabilities=(MediaCapability.TEXT_TO_AUDIO,),
            description=f"Kokoro TTS model: {model_id}",
            parameters={
                "voice": {"type": "string", "default": kokoro_config.DEFAULT_VOICE},
                "speed": {"type": "number", "default": kokoro_config.DEFAULT_SPEED},
            },
        )

    def build_model(self, model_id: str) -> KokoroTextToAudioModel:
        return KokoroTextToAudioModel(
            model_id=model_id,
            name=_MODEL_NAMES.get(model_id, model_id),
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )


__all__ = ["KokoroDockerProvider", "KokoroTextToAudioModel"]
