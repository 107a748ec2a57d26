"""Read-only catalogue of registered providers, their models and health."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import ServiceError
from core.providers import resolvers
from core.providers.base import BaseMediaProvider
from core.providers.capabilities import parse_capability
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.registries import ProviderRegistry
from core.providers.types import ProviderHealth
from features.providers.schemas import (
    ProviderDetail,
    ProviderHealthSchema,
    ProviderModelSchema,
    ProviderSummary,
)

logger = logging.getLogger(__name__)


class ProviderCatalogService:
    """Answer provider and model queries for the HTTP layer."""

    def __init__(self, registry: Optional[ProviderRegistry] = None) -> None:
        self._registry = registry

    def list_providers(self, capability: Optional[str] = None) -> List[ProviderSummary]:
        if capability:
            providers = resolvers.get_providers_by_capability(capability, registry=self._registry)
        else:
            providers = resolvers.get_providers(registry=self._registry)
        return [self._summarise(provider) for provider in providers]

    def get_provider(self, provider_id: str) -> ProviderDetail:
        provider = resolvers.get_provider(provider_id, registry=self._registry)
        summary = self._summarise(provider)
        return ProviderDetail(
            **summary.model_dump(),
            model_descriptors=self._describe_models(provider),
        )

    def list_models(self, provider_id: str, capability: Optional[str] = None) -> List[ProviderModelSchema]:
        provider = resolvers.get_provider(provider_id, registry=self._registry)
        if capability:
            descriptors = provider.get_models_for_capability(parse_capability(capability))
            return [ProviderModelSchema.from_descriptor(descriptor) for descriptor in descriptors]
        return self._describe_models(provider)

    async def get_health(self, provider_id: str) -> ProviderHealthSchema:
        provider = resolvers.get_provider(provider_id, registry=self._registry)

        if isinstance(provider, AbstractDockerProvider):
            try:
                await provider.ensure_initialized()
            except ServiceError as exc:
                logger.warning("Provider %s could not resolve its service: %s", provider_id, exc)
                health = await provider.get_health()
                health.last_error = str(exc)
                return ProviderHealthSchema.build(
                    provider_id,
                    health,
                    {"running": False, "healthy": False, "error": str(exc)},
                )
            service_status = await provider.get_service_status()
            health = await provider.get_health()
        else:
            health = await provider.get_health()
            service_status = self._status_from_health(health)

        return ProviderHealthSchema.build(provider_id, health, service_status)

    @staticmethod
    def _status_from_health(health: ProviderHealth) -> Dict[str, Any]:
        healthy = health.status == "healthy"
        return {"running": healthy, "healthy": healthy, "error": health.last_error}

    @staticmethod
    def _describe_models(provider: BaseMediaProvider) -> List[ProviderModelSchema]:
        seen: Dict[str, ProviderModelSchema] = {}
        for capability in provider.capabilities:
            for descriptor in provider.get_models_for_capability(capability):
                seen.setdefault(descriptor.id, ProviderModelSchema.from_descriptor(descriptor))
        return list(seen.values())

    @staticmethod
    def _summarise(provider: BaseMediaProvider) -> ProviderSummary:
        if isinstance(provider, AbstractDockerProvider):
            return ProviderSummary(**provider.get_info())
        return ProviderSummary(
            id=provider.id,
            name=provider.name,
            type=provider.type.value,
            capabilities=[capability.value for capability in provider.capabilities],
            models=provider.get_available_models(),
        )


__all__ = ["ProviderCatalogService"]
