"""Base Provider Interfaces - Abstract Contracts for All Media Providers
This module defines the abstract base classes that every provider and model
wrapper must follow. These interfaces keep dispatch uniform regardless of
whether a provider forwards to a Docker-hosted service or a hosted API.
Design Pattern:
    - Abstract base classes with @abstractmethod for required methods
    - Capability enum (core/providers/capabilities.py) to advertise features
    - Immutable ProviderModel descriptors for "list models" queries
    - Model wrappers built on demand for "give me model X" queries
Provider Lifecycle:
    1. Provider class registered via register_provider() in core/providers/__init__.py
    2. ProviderRegistry instantiates it lazily on first lookup
    3. Caller lists descriptors with get_models_for_capability()
    4. Caller builds a wrapper with get_model()/create_model()
    5. Caller invokes wrapper.transform()
See Also:
    - core/providers/docker/provider_base.py: shared Docker provider logic
    - core/providers/registries.py: provider registry
    - core/providers/resolvers.py: capability-based resolution
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Mapping, Sequence

from core.providers.capabilities import MediaCapability, ProviderType
from core.providers.types import ProviderHealth, ProviderModel


class BaseMediaModel(ABC):
    """Base interface for a model wrapper returned by a provider."""

    id: str
    name: str
    provider: str
    capabilities: Sequence[MediaCapability] = ()

    def get_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        return self.name

    def get_provider(self) -> str:
        return self.provider

    @abstractmethod
    async def transform(self, input: Any, **options: Any) -> Any:
        """Run the model against ``input`` and return a normalised result."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Return True when the backing service can accept requests."""


class BaseMediaProvider(ABC):
    """Base interface for media providers."""

    id: ClassVar[str]
    name: ClassVar[str]
    type: ClassVar[ProviderType]
    capabilities: ClassVar[Sequence[MediaCapability]]

    @property
    def models(self) -> List[ProviderModel]:
        """Descriptors for the provider's primary (first) capability."""

        if not self.capabilities:
            return []
        return self.get_models_for_capability(self.capabilities[0])

    def supports_capability(self, capability: MediaCapability) -> bool:
        return capability in self.capabilities

    @abstractmethod
    async def configure(self, settings: Mapping[str, Any]) -> None:
        """Apply provider specific configuration settings."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Return True when the provider can serve requests."""

    @abstractmethod
    def get_available_models(self) -> List[str]:
        """Return the identifiers of every model the provider supports."""

    @abstractmethod
    def get_models_for_capability(self, capability: MediaCapability) -> List[ProviderModel]:
        """Return descriptors for ``capability``; empty when unsupported."""

    @abstractmethod
    async def create_model(self, model_id: str) -> BaseMediaModel:
        """Build a model wrapper or raise ``ModelNotSupportedError``."""

    @abstractmethod
    async def get_model(self, model_id: str) -> BaseMediaModel:
        """Return a model wrapper or raise ``ModelNotFoundError``."""

    @abstractmethod
    async def get_health(self) -> ProviderHealth:
        """Return a health snapshot for the provider."""


__all__ = ["BaseMediaModel", "BaseMediaProvider"]
