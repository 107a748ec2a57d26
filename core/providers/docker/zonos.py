"""Zonos provider: multilingual text-to-speech with speaker conditioning."""

from __future__ import annotations

import base64
import logging
from typing import Any, ClassVar, Dict, List, Sequence

from config.docker.providers import zonos as zonos_config
from core.exceptions import ValidationError
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import AudioResult, ProviderModel

logger = logging.getLogger(__name__)

_MODEL_NAMES: Dict[str, str] = {
    "zonos-tts": "Zonos TTS",
    "zonos-docker-tts": "Zonos Docker TTS",
    "zonos-styletts2": "Zonos StyleTTS2",
}


class ZonosTextToAudioModel(DockerMediaModel):
    async def transform(self, input: Any, **options: Any) -> AudioResult:
        text = self.extract_text(input)
        if len(text) > zonos_config.MAX_TEXT_LENGTH:
            raise ValidationError(
                f"Text exceeds maximum length of {zonos_config.MAX_TEXT_LENGTH} characters",
                field="input",
            )

        language = options.get("language") or zonos_config.DEFAULT_LANGUAGE
        if language not in zonos_config.SUPPORTED_LANGUAGES:
            raise ValidationError(f"Unsupported language: {language}", field="language")

        model_choice = options.get("model_choice") or zonos_config.DEFAULT_MODEL_CHOICE
        if model_choice not in zonos_config.MODEL_CHOICES:
            raise ValidationError(f"Unsupported Zonos model: {model_choice}", field="model_choice")

        voice = options.get("voice") or zonos_config.DEFAULT_VOICE
        payload: Dict[str, Any] = {
            "text": text,
            "model": model_choice,
            "language": language,
            "speed": float(options.get("speed") or 1.0),
            "voice": voice,
            "speaker_noised": bool(options.get("speaker_noised", False)),
        }
        for key in ("speaker_audio", "prefix_audio"):
            if options.get(key) is not None:
                payload[key] = base64.b64encode(self.extract_bytes(options[key], field=key)).decode("ascii")

        logger.info("Requesting Zonos TTS (model=%s language=%s voice=%s)", model_choice, language, voice)
        response = await self.client.post_for_bytes(zonos_config.TTS_ENDPOINT, json=payload)

        return AudioResult(
            audio_bytes=response.content,
            format=zonos_config.DEFAULT_AUDIO_FORMAT,
            model=self.id,
            provider=self.provider,
            voice=voice,
            metadata={"language": language, "model_choice": model_choice},
        )


class ZonosDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "zonos-docker"
    name: ClassVar[str] = "Zonos Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.TEXT_TO_AUDIO,)

    service_url_env = zonos_config.SERVICE_URL_ENV
    default_service_url = zonos_config.DEFAULT_SERVICE_URL
    default_base_url = zonos_config.DEFAULT_BASE_URL
    request_timeout = zonos_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(zonos_config.SUPPORTED_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(
            id=model_id,
            name=_MODEL_NAMES.get(model_id, model_id),
            capabilities=(MediaCapability.TEXT_TO_AUDIO,),
            description="Zonos text-to-speech with voice conditioning",
            parameters=zonos_config.MODEL_PARAMETERS,
        )

    def build_model(self, model_id: str) -> ZonosTextToAudioModel:
        return ZonosTextToAudioModel(
            model_id=model_id,
            name=_MODEL_NAMES.get(model_id, model_id),
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )

    def get_supported_languages(self) -> List[str]:
        return list(zonos_config.SUPPORTED_LANGUAGES)

    def get_available_voices(self) -> List[str]:
        return list(zonos_config.AVAILABLE_VOICES)


__all__ = ["ZonosDockerProvider", "ZonosTextToAudioModel"]
