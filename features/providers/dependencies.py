"""Dependency helpers for the providers feature."""

from __future__ import annotations

from functools import lru_cache

from .service import ProviderCatalogService


@lru_cache(maxsize=1)
def _catalog_service_singleton() -> ProviderCatalogService:
    return ProviderCatalogService()


def get_provider_catalog_service() -> ProviderCatalogService:
    """Return a cached :class:`ProviderCatalogService` bound to the global registry."""

    return _catalog_service_singleton()


__all__ = ["get_provider_catalog_service"]
