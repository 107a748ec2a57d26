"""Provider Registry - lazily instantiated, cached provider classes by id."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Type

from config.docker import CAPABILITY_PRIORITY
from core.exceptions import ProviderCreationError, ProviderNotFoundError, ServiceError
from core.providers.base import BaseMediaProvider
from core.providers.capabilities import MediaCapability, ProviderType, parse_capability

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Map provider ids to classes and cache the instances built from them."""

    def __init__(self, priority: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        self._providers: Dict[str, Type[BaseMediaProvider]] = {}
        self._instances: Dict[str, BaseMediaProvider] = {}
        self._priority: Mapping[str, Sequence[str]] = priority if priority is not None else CAPABILITY_PRIORITY

    def register(self, provider_id: str, provider_class: Type[BaseMediaProvider]) -> None:
        self._providers[provider_id] = provider_class
        self._instances.pop(provider_id, None)
        logger.debug("Registered provider %s -> %s", provider_id, provider_class.__name__)

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self._providers

    def get_available_providers(self) -> List[str]:
        return list(self._providers)

    def get_provider(self, provider_id: str) -> BaseMediaProvider:
        """Return the cached instance, building it on first use."""

        cached = self._instances.get(provider_id)
        if cached is not None:
            return cached

        provider_class = self._providers.get(provider_id)
        if provider_class is None:
            raise ProviderNotFoundError(provider_id)

        try:
            provider = provider_class()
        except Exception as exc:
            raise ProviderCreationError(provider_id, str(exc), original_error=exc) from exc

        self._instances[provider_id] = provider
        return provider

    def _ordered_ids(self, capability: MediaCapability) -> Iterable[str]:
        preferred = [pid for pid in self._priority.get(capability.value, ()) if pid in self._providers]
        yield from preferred
        yield from (pid for pid in self._providers if pid not in preferred)

    def get_providers_by_capability(self, capability: MediaCapability | str) -> List[BaseMediaProvider]:
        """Providers supporting ``capability``: configured priority first, then registration order."""

        capability = parse_capability(capability)
        providers: List[BaseMediaProvider] = []
        for provider_id in self._ordered_ids(capability):
            try:
                provider = self.get_provider(provider_id)
            except ServiceError as exc:
                logger.warning("Skipping provider %s: %s", provider_id, exc)
                continue
            if provider.supports_capability(capability):
                providers.append(provider)
        return providers

    def find_best_provider(
        self,
        capability: MediaCapability | str,
        exclude_providers: Optional[Iterable[str]] = None,
        prefer_local: bool = False,
    ) -> Optional[BaseMediaProvider]:
        providers = self.get_providers_by_capability(capability)
        if exclude_providers:
            excluded = set(exclude_providers)
            providers = [provider for provider in providers if provider.id not in excluded]

        if prefer_local:
            for provider in providers:
                if provider.type == ProviderType.LOCAL:
                    return provider

        return providers[0] if providers else None

    def get_providers(self) -> List[BaseMediaProvider]:
        providers: List[BaseMediaProvider] = []
        for provider_id in self._providers:
            try:
                providers.append(self.get_provider(provider_id))
            except ServiceError as exc:
                logger.warning("Skipping provider %s: %s", provider_id, exc)
        return providers

    def refresh_provider(self, provider_id: str) -> None:
        """Drop the cached instance so the next lookup rebuilds it."""

        self._instances.pop(provider_id, None)

    def clear_cache(self) -> None:
        self._instances.clear()
        logger.info("Provider cache cleared")

    def get_stats(self) -> Dict[str, int]:
        return {
            "total_providers": len(self._providers),
            "cached_providers": len(self._instances),
        }


_provider_registry = ProviderRegistry()


def get_provider_registry() -> ProviderRegistry:
    """Return the process-wide provider registry."""

    return _provider_registry


def register_provider(provider_id: str, provider_class: Type[BaseMediaProvider]) -> None:
    """Register a provider implementation with the global registry."""
    _provider_registry.register(provider_id, provider_class)


__all__ = ["ProviderRegistry", "get_provider_registry", "register_provider"]
