"""Chatterbox provider: text-to-speech with optional voice cloning."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from config.docker.providers import chatterbox as chatterbox_config
from core.exceptions import ProviderError, ValidationError
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import AudioResult, ProviderModel

logger = logging.getLogger(__name__)


class ChatterboxTextToAudioModel(DockerMediaModel):
    """Synthesize speech through the Chatterbox TTS server.

    Options:
        voice: predefined voice file name (``Abigail.wav`` by default)
        format: ``mp3`` or ``wav``
        speed: speed factor passed to the server
        voice_file: local audio file used as the cloning reference
        voice_to_clone: raw bytes (or an object with ``data``/``format``) used as the reference
        force_upload: upload the reference even when the server already has it
    """

    async def transform(self, input: Any, **options: Any) -> AudioResult:
        text = self.extract_text(input)
        if len(text) > chatterbox_config.MAX_TEXT_LENGTH:
            raise ValidationError(
                f"Text exceeds maximum length of {chatterbox_config.MAX_TEXT_LENGTH} characters",
                field="input",
            )

        audio_format = str(options.get("format") or chatterbox_config.DEFAULT_AUDIO_FORMAT).lower()
        if audio_format not in chatterbox_config.AVAILABLE_FORMATS:
            raise ValidationError(f"Unsupported audio format: {audio_format}", field="format")

        voice = options.get("voice") or chatterbox_config.DEFAULT_VOICE
        reference = await self._resolve_reference(options)

        payload: Dict[str, Any] = {
            "text": text,
            "voice_mode": "clone" if reference else "predefined",
            "output_format": audio_format,
            "split_text": True,
        }
        if reference:
            payload["reference_audio_filename"] = reference
        else:
            payload["predefined_voice_id"] = voice
        if options.get("speed") is not None:
            payload["speed_factor"] = float(options["speed"])

        logger.info(
            "Requesting Chatterbox TTS (voice_mode=%s voice=%s format=%s)",
            payload["voice_mode"],
            reference or voice,
            audio_format,
        )
        response = await self.client.post_for_bytes(chatterbox_config.TTS_ENDPOINT, json=payload)

        return AudioResult(
            audio_bytes=response.content,
            format=audio_format,
            model=self.id,
            provider=self.provider,
            voice=reference or voice,
            metadata={"voice_mode": payload["voice_mode"], "text_length": len(text)},
        )

    async def get_reference_files(self) -> List[str]:
        data = await self.client.get_json(chatterbox_config.REFERENCE_FILES_ENDPOINT)
        if isinstance(data, dict):
            data = data.get("files", [])
        return [str(item) for item in data or []]

    async def upload_reference_audio(self, filename: str, content: bytes) -> str:
        response = await self.client.request(
            "POST",
            chatterbox_config.UPLOAD_REFERENCE_ENDPOINT,
            files={"files": (filename, content)},
        )
        data = self.client.decode_json(response, chatterbox_config.UPLOAD_REFERENCE_ENDPOINT)
        uploaded = data.get("uploaded_files") or [data.get("filename")]
        if not uploaded or not uploaded[0]:
            raise ProviderError("Chatterbox upload returned no filename", provider=self.provider)
        return str(uploaded[0])

    async def _resolve_reference(self, options: Dict[str, Any]) -> Optional[str]:
        voice_to_clone = options.get("voice_to_clone")
        voice_file = options.get("voice_file")
        if voice_to_clone is None and not voice_file:
            return None

        if voice_to_clone is not None:
            content = self.extract_bytes(voice_to_clone, field="voice_to_clone")
            suffix = getattr(voice_to_clone, "format", None) or "wav"
            filename = f"voice_clone_{int(time.time() * 1000)}.{suffix}"
        else:
            path = Path(str(voice_file))
            if not path.exists():
                raise ValidationError(f"Voice file not found: {path}", field="voice_file")
            filename = path.name
            content = await asyncio.to_thread(path.read_bytes)

        if not options.get("force_upload"):
            try:
                existing = await self.get_reference_files()
            except ProviderError as exc:
                logger.warning("Could not list Chatterbox reference files, uploading: %s", exc)
                existing = []
            if filename in existing:
                logger.info("Reference file %s already on server, skipping upload", filename)
                return filename

        uploaded = await self.upload_reference_audio(filename, content)
        logger.info("Uploaded Chatterbox reference file %s", uploaded)
        return uploaded


class ChatterboxDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "chatterbox-docker"
    name: ClassVar[str] = "Chatterbox TTS (Docker)"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.TEXT_TO_AUDIO,)

    service_url_env = chatterbox_config.SERVICE_URL_ENV
    default_service_url = chatterbox_config.DEFAULT_SERVICE_URL
    default_base_url = chatterbox_config.DEFAULT_BASE_URL
    request_timeout = chatterbox_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(chatterbox_config.SUPPORTED_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(
            id=model_id,
            name="Chatterbox TTS",
            capabilities=(MediaCapability.TEXT_TO_AUDIO,),
            description="Text-to-speech with voice cloning",
            parameters={
                "voice": {"type": "string", "default": chatterbox_config.DEFAULT_VOICE},
                "format": {"type": "string", "enum": chatterbox_config.AVAILABLE_FORMATS},
                "speed": {"type": "number", "default": 1.0},
            },
        )

    def build_model(self, model_id: str) -> ChatterboxTextToAudioModel:
        return ChatterboxTextToAudioModel(
            model_id=model_id,
            name="Chatterbox Text-to-Speech",
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )

    def get_available_voices(self) -> List[str]:
        return list(chatterbox_config.PREDEFINED_VOICES)


__all__ = ["ChatterboxDockerProvider", "ChatterboxTextToAudioModel"]
