"""Cowsay provider: text-to-text through the cowsay service container."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, List, Sequence

from config.docker.providers import cowsay as cowsay_config
from core.providers.capabilities import MediaCapability
from core.providers.docker.model_base import DockerMediaModel
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.types import ProviderModel, TextResult

logger = logging.getLogger(__name__)


class CowsayDockerModel(DockerMediaModel):
    """Render text as ASCII art spoken by a cow."""

    async def transform(self, input: Any, **options: Any) -> TextResult:
        text = self.extract_text(input)
        payload = {"text": text}
        if options.get("cow"):
            payload["cow"] = options["cow"]

        logger.debug("Requesting cowsay for %d characters", len(text))
        data = await self.client.post_json(cowsay_config.COWSAY_ENDPOINT, payload)
        output = data.get("output") if isinstance(data, dict) else data
        return TextResult(
            text=str(output or ""),
            model=self.id,
            provider=self.provider,
            metadata={"input_length": len(text)},
        )


class CowsayDockerProvider(AbstractDockerProvider):
    id: ClassVar[str] = "cowsay-docker-provider"
    name: ClassVar[str] = "Cowsay Docker Provider"
    capabilities: ClassVar[Sequence[MediaCapability]] = (MediaCapability.TEXT_TO_TEXT,)

    service_url_env = cowsay_config.SERVICE_URL_ENV
    default_service_url = cowsay_config.DEFAULT_SERVICE_URL
    default_base_url = cowsay_config.DEFAULT_BASE_URL
    request_timeout = cowsay_config.REQUEST_TIMEOUT

    def get_available_models(self) -> List[str]:
        return list(cowsay_config.SUPPORTED_MODELS)

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(
            id=model_id,
            name="Cowsay Default",
            capabilities=(MediaCapability.TEXT_TO_TEXT,),
        )

    def build_model(self, model_id: str) -> CowsayDockerModel:
        return CowsayDockerModel(
            model_id=model_id,
            name="Cowsay Default",
            provider=self.id,
            capabilities=self.capabilities,
            client=self.build_client(),
            service=self.get_docker_service(),
        )


__all__ = ["CowsayDockerModel", "CowsayDockerProvider"]
