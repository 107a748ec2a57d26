"""Shared behaviour for providers backed by a Docker-hosted service.

Each concrete provider declares its metadata (id, capabilities, env var,
default service identifier) plus the models it can build. This base class
resolves the backing service through the service registry on first use,
derives the HTTP base URL from the service's host port and turns lifecycle
and status queries into calls on the service handle.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional

import httpx

from config.docker import AVAILABILITY_TIMEOUT_SECONDS, DEFAULT_REQUEST_TIMEOUT_SECONDS
from core.exceptions import (
    ModelNotFoundError,
    ModelNotSupportedError,
    ProviderError,
    ServiceError,
)
from core.providers.base import BaseMediaModel, BaseMediaProvider
from core.providers.capabilities import MediaCapability, ProviderType, parse_capability
from core.providers.docker.http_client import ServiceHTTPClient
from core.providers.docker.registry import ServiceRegistry, get_service_registry
from core.providers.docker.service import DockerService
from core.providers.types import ProviderHealth, ProviderModel
from core.utils.env import get_env

logger = logging.getLogger(__name__)


class AbstractDockerProvider(BaseMediaProvider):
    """Base class for providers whose models run in a local service container."""

    type: ClassVar[ProviderType] = ProviderType.LOCAL

    service_url_env: ClassVar[str]
    default_service_url: ClassVar[Optional[str]] = None
    default_base_url: ClassVar[str]
    request_timeout: ClassVar[float] = DEFAULT_REQUEST_TIMEOUT_SECONDS

    def __init__(
        self,
        *,
        service_registry: Optional[ServiceRegistry] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._service_registry = service_registry
        self._http_transport = http_transport
        self._docker_service: Optional[DockerService] = None
        self._service_url_override: Optional[str] = None
        self._base_url_override: Optional[str] = None
        self._init_lock: Optional[asyncio.Lock] = None
        self._started_at = time.monotonic()

    # ------------------------------------------------------------------
    # Service resolution
    # ------------------------------------------------------------------
    def get_service_url(self) -> Optional[str]:
        """Service identifier: configured override, ``*_SERVICE_URL`` or the default."""

        if self._service_url_override:
            return self._service_url_override
        return get_env(self.service_url_env, default=self.default_service_url)

    def get_default_base_url(self) -> str:
        return self._base_url_override or self.default_base_url

    @property
    def service_registry(self) -> ServiceRegistry:
        return self._service_registry or get_service_registry()

    @property
    def is_initialized(self) -> bool:
        return self._docker_service is not None

    @property
    def base_url(self) -> str:
        if self._docker_service is not None:
            ports = self._docker_service.get_service_info().ports
            if ports:
                return f"http://localhost:{ports[0]}"
        return self.get_default_base_url()

    async def ensure_initialized(self) -> None:
        """Resolve the backing service once; concurrent callers share the work."""

        if self._docker_service is not None:
            return
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        async with self._init_lock:
            if self._docker_service is None:
                await self._initialize_service()

    async def _initialize_service(self) -> None:
        service_url = self.get_service_url()
        if not service_url:
            logger.warning("No service URL provided for %s", self.id)
            return

        self._docker_service = await self.service_registry.get_service(service_url)
        logger.info("%s initialized with service: %s", self.id, service_url)
        await self.on_service_ready()

    async def on_service_ready(self) -> None:
        """Hook run once after the service handle is resolved."""

    def get_docker_service(self) -> DockerService:
        if self._docker_service is None:
            raise ProviderError(
                f"Service for {self.id} is not initialised yet",
                provider=self.id,
            )
        return self._docker_service

    def build_client(self, timeout: Optional[float] = None) -> ServiceHTTPClient:
        return ServiceHTTPClient(
            self.base_url,
            provider=self.id,
            timeout=timeout or self.request_timeout,
            transport=self._http_transport,
        )

    async def configure(self, settings: Mapping[str, Any]) -> None:
        """Accept ``service_url``/``base_url`` overrides and resolve the service."""

        service_url = settings.get("service_url") or settings.get("serviceUrl")
        base_url = settings.get("base_url") or settings.get("baseUrl")
        if base_url:
            self._base_url_override = str(base_url)
        if service_url and service_url != self.get_service_url():
            self._service_url_override = str(service_url)
            self._docker_service = None

        await self.ensure_initialized()
        logger.info("%s configured (service=%s)", self.id, self.get_service_url())

    # ------------------------------------------------------------------
    # Lifecycle and status
    # ------------------------------------------------------------------
    async def start_service(self) -> bool:
        try:
            await self.ensure_initialized()
            return await self._call_lifecycle("start_service")
        except ServiceError as exc:
            logger.error("Failed to start service for %s: %s", self.id, exc)
            return False

    async def stop_service(self) -> bool:
        try:
            return await self._call_lifecycle("stop_service")
        except ServiceError as exc:
            logger.error("Failed to stop service for %s: %s", self.id, exc)
            return False

    async def _call_lifecycle(self, method_name: str) -> bool:
        service = self.get_docker_service()
        method = getattr(service, method_name, None)
        if method is None:
            logger.warning("Service handle for %s does not implement %s", self.id, method_name)
            return False
        return bool(await method())

    async def get_service_status(self) -> Dict[str, Any]:
        """Return ``{running, healthy, error}`` without raising."""

        if self._docker_service is None:
            return {"running": False, "healthy": False, "error": "Service not initialised"}

        try:
            status = await self._docker_service.get_service_status()
        except (ServiceError, httpx.HTTPError) as exc:
            logger.error("Failed to get service status for %s: %s", self.id, exc)
            return {"running": False, "healthy": False, "error": str(exc)}

        error = None
        if status.state in ("error", "unreachable"):
            error = status.state
        return {
            "running": status.running,
            "healthy": status.health == "healthy",
            "error": error,
        }

    async def is_available(self) -> bool:
        if self._docker_service is None:
            return False
        try:
            return await self._docker_service.wait_for_healthy(AVAILABILITY_TIMEOUT_SECONDS)
        except (ServiceError, httpx.HTTPError) as exc:
            logger.error("Availability check failed for %s: %s", self.id, exc)
            return False

    async def get_health(self) -> ProviderHealth:
        status = await self.get_service_status()
        return ProviderHealth(
            status="healthy" if status["healthy"] else "unhealthy",
            uptime_seconds=time.monotonic() - self._started_at,
            last_error=status.get("error"),
        )

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------
    @abstractmethod
    def get_available_models(self) -> List[str]:
        """Identifiers of every model this provider can build."""

    @abstractmethod
    def build_model(self, model_id: str) -> BaseMediaModel:
        """Construct the wrapper for a supported ``model_id``."""

    def supports_model(self, model_id: str) -> bool:
        return bool(model_id) and model_id in self.get_available_models()

    def describe_model(self, model_id: str) -> ProviderModel:
        return ProviderModel(id=model_id, name=model_id, capabilities=tuple(self.capabilities))

    def get_models_for_capability(self, capability: MediaCapability | str) -> List[ProviderModel]:
        capability = parse_capability(capability)
        if capability not in self.capabilities:
            return []
        descriptors = (self.describe_model(model_id) for model_id in self.get_available_models())
        return [descriptor for descriptor in descriptors if descriptor.supports(capability)]

    async def refresh_model_catalog(self) -> None:
        """Hook run before a model id is checked; providers that discover models refresh here."""

    async def create_model(self, model_id: str) -> BaseMediaModel:
        await self.refresh_model_catalog()
        if not self.supports_model(model_id):
            raise ModelNotSupportedError(model_id, provider=self.name)
        await self.ensure_initialized()
        return self.build_model(model_id)

    async def get_model(self, model_id: str) -> BaseMediaModel:
        await self.refresh_model_catalog()
        if not self.supports_model(model_id):
            raise ModelNotFoundError(model_id, provider=self.id)
        return await self.create_model(model_id)

    def get_info(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "capabilities": [capability.value for capability in self.capabilities],
            "models": self.get_available_models(),
            "service_url": self.get_service_url(),
            "base_url": self.base_url,
            "initialized": self.is_initialized,
        }


__all__ = ["AbstractDockerProvider"]
