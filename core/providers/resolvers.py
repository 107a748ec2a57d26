"""Provider Resolvers - resolve providers and models from the global registry.

Routes and scripts go through these helpers instead of touching the registry
directly so tests can swap the registry in one place.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.exceptions import NotFoundError
from core.providers.base import BaseMediaModel, BaseMediaProvider
from core.providers.capabilities import MediaCapability, parse_capability
from core.providers.registries import ProviderRegistry, get_provider_registry

logger = logging.getLogger(__name__)


def get_provider(provider_id: str, *, registry: Optional[ProviderRegistry] = None) -> BaseMediaProvider:
    """Return the provider registered under ``provider_id``."""

    return (registry or get_provider_registry()).get_provider(provider_id)


def get_providers(*, registry: Optional[ProviderRegistry] = None) -> List[BaseMediaProvider]:
    return (registry or get_provider_registry()).get_providers()


def get_providers_by_capability(
    capability: MediaCapability | str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> List[BaseMediaProvider]:
    return (registry or get_provider_registry()).get_providers_by_capability(capability)


def find_best_provider(
    capability: MediaCapability | str,
    exclude_providers: Optional[Iterable[str]] = None,
    prefer_local: bool = False,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> Optional[BaseMediaProvider]:
    return (registry or get_provider_registry()).find_best_provider(
        capability,
        exclude_providers=exclude_providers,
        prefer_local=prefer_local,
    )


async def get_model(
    provider_id: str,
    model_id: str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> BaseMediaModel:
    """Resolve ``provider_id`` and return its ``model_id`` wrapper."""

    provider = get_provider(provider_id, registry=registry)
    logger.info("Resolving model %s from provider %s", model_id, provider_id)
    return await provider.get_model(model_id)


async def get_model_for_capability(
    capability: MediaCapability | str,
    model_id: Optional[str] = None,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> BaseMediaModel:
    """Return a model for ``capability`` from the highest priority provider.

    When ``model_id`` is given, the first provider listing that model for the
    capability wins; otherwise the best provider's first model is used.
    """

    capability = parse_capability(capability)
    providers = get_providers_by_capability(capability, registry=registry)
    for provider in providers:
        model_ids = [descriptor.id for descriptor in provider.get_models_for_capability(capability)]
        if not model_ids:
            continue
        if model_id is None:
            return await provider.get_model(model_ids[0])
        if model_id in model_ids:
            return await provider.get_model(model_id)

    target = model_id or "any model"
    raise NotFoundError(f"No provider offers {target} for {capability.value}", resource=capability.value)


__all__ = [
    "find_best_provider",
    "get_model",
    "get_model_for_capability",
    "get_provider",
    "get_providers",
    "get_providers_by_capability",
]
