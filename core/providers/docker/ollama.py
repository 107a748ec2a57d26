"""Ollama provider: local LLM text generation with model discovery."""

from __future__ import annotations

import logging
import time
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from config.docker.providers import ollama as ollama_config
from core.exceptions import ProviderError
from core.providers.capabilities import MediaCapability
from core.providers.docker.http_client import ServiceHTTPClient
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import ProviderModel, TextResult

logger = logging.getLogger(__name__)


async def list_installed_models(client: ServiceHTTPClient) -> List[str]:
    data = await client.get_json(ollama_config.TAGS_ENDPOINT)
    models = data.get("models", []) if isinstance(data, dict) else []
    return [str(model["name"]) for model in models if isinstance(model, dict) and model.get("name")]


class OllamaTextToTextModel(DockerMediaModel):
    async def transform(self, input: Any, **options: Any) -> TextResult:
        prompt = self.extract_text(input)
        generation_options: Dict[str, Any] = {
            "temperature": options.get("temperature", ollama_config.DEFAULT_TEMPERATURE),
        }
        if options.get("max_tokens") is not None:
            generation_options["num_predict"] = int(options["max_tokens"])

        payload: Dict[str, Any] = {
            "model": self.id,
            "prompt": prompt,
            "stream": False,
            "options": generation_options,
        }
        if options.get("system"):
            payload["system"] = options["system"]

        logger.info("Requesting Ollama generation (model=%s)", self.id)
        data = await self.client.post_json(ollama_config.GENERATE_ENDPOINT, payload)
        if not isinstance(data, dict) or "response" not in data:
            raise ProviderError("Ollama returned no response text", provider=self.provider)

        return TextResult(
            text=str(data["response"]),
            model=self.id,
            provider=self.provider,
            metadata={
                "done": data.get("done"),
                "eval_count": data.get("eval_count"),
                "prompt_eval_count": data.get("prompt_eval_count"),
            },
        )

    async def ensure_available(self) -> bool:
        """Pull the model into the Ollama service when it is not installed yet."""

        installed = await list_installed_models(self.client)
        if self.id in installed:
            return True

        logger.info("Pulling Ollama model %s", self.id)
        data = await self.client.post_json(ollama_config.PULL_ENDPOINT, {"name": self.id, "stream": False})
        return isinstance(data, dict) and data.get("status") == "success"


class OllamaDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "ollama-docker"
    name: ClassVar[str] = "Ollama Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.TEXT_TO_TEXT,)

    service_url_env = ollama_config.SERVICE_URL_ENV
    default_service_url = ollama_config.DEFAULT_SERVICE_URL
    default_base_url = ollama_config.DEFAULT_BASE_URL
    request_timeout = ollama_config.REQUEST_TIMEOUT

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._discovered_models: List[str] = []
        self._models_fetched_at: Optional[float] = None

    def get_available_models(self) -> List[str]:
        models = list(ollama_config.DEFAULT_MODELS)
        models.extend(model for model in self._discovered_models if model not in models)
        return models

    async def refresh_models(self, *, force: bool = False) -> List[str]:
        """Refresh installed models from ``/api/tags``; cached for the TTL."""

        now = time.monotonic()
        if (
            not force
            and self._models_fetched_at is not None
            and now - self._models_fetched_at < ollama_config.MODEL_CACHE_TTL_SECONDS
        ):
            return self.get_available_models()

        try:
            self._discovered_models = await list_installed_models(self.build_client(timeout=10.0))
        except ProviderError as exc:
            logger.warning("Failed to refresh Ollama models: %s", exc)
            return self.get_available_models()

        self._models_fetched_at = now
        logger.info("Refreshed Ollama models cache: %d models found", len(self._discovered_models))
        return self.get_available_models()

    async def on_service_ready(self) -> None:
        await self.refresh_models()

    async def refresh_model_catalog(self) -> None:
        await self.ensure_initialized()
        await self.refresh_models()

    async def create_model(self, model_id: str) -> OllamaTextToTextModel:
        model = await super().create_model(model_id)
        if model_id in self._discovered_models:
            return model

        if not await model.ensure_available():
            raise ProviderError(
                f"Failed to ensure model {model_id} is available in the Ollama service",
                provider=self.id,
            )
        await self.refresh_models(force=True)
        return model

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(
            id=model_id,
            name=f"Ollama {model_id}",
            capabilities=(MediaCapability.TEXT_TO_TEXT,),
            description=f"Local Ollama model: {model_id}",
            parameters={
                "temperature": {"type": "number", "default": ollama_config.DEFAULT_TEMPERATURE},
                "max_tokens": {"type": "integer"},
            },
        )

    def build_model(self, model_id: str) -> OllamaTextToTextModel:
        return OllamaTextToTextModel(
            model_id=model_id,
            name=f"Ollama {model_id}",
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )


__all__ = ["OllamaDockerProvider", "OllamaTextToTextModel", "list_installed_models"]
