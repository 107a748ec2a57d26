"""Service registry resolving service identifiers to service handles."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import httpx

from config.services import DEFAULT_GITHUB_REF, SERVICE_DESCRIPTOR_FILENAME, get_services_dir
from core.exceptions import ServiceCreationError, ServiceNotFoundError, ValidationError
from core.providers.docker.descriptor import ServiceDescriptor
from core.providers.docker.service import ConfigurableDockerService, DockerService

logger = logging.getLogger(__name__)

_GITHUB_PREFIXES = ("github:", "https://github.com/", "http://github.com/")


@dataclass(frozen=True, slots=True)
class GitHubServiceRef:
    owner: str
    repo: str
    ref: str = DEFAULT_GITHUB_REF

    @property
    def directory_name(self) -> str:
        return f"{self.owner}-{self.repo}"

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}.git"


def is_github_identifier(identifier: str) -> bool:
    return identifier.startswith(_GITHUB_PREFIXES)


def parse_github_identifier(identifier: str) -> GitHubServiceRef:
    """Parse ``github:owner/repo[@ref]`` or ``https://github.com/owner/repo[@ref]``."""

    path = identifier
    for prefix in _GITHUB_PREFIXES:
        if path.startswith(prefix):
            path = path[len(prefix):]
            break
    else:
        raise ValidationError(f"Not a GitHub service identifier: {identifier}", field="identifier")

    path, _, ref = path.partition("@")
    parts = [part for part in path.strip("/").split("/") if part]
    if len(parts) != 2:
        raise ValidationError(
            f"Invalid GitHub service identifier '{identifier}'. Expected github:owner/repo[@ref]",
            field="identifier",
        )

    owner, repo = parts
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return GitHubServiceRef(owner=owner, repo=repo, ref=ref.strip() or DEFAULT_GITHUB_REF)


class ServiceRegistry:
    """Resolve, build and cache service handles by identifier."""

    def __init__(
        self,
        services_dir: str | Path | None = None,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._services_dir = Path(services_dir) if services_dir is not None else None
        self._http_transport = http_transport
        self._services: Dict[str, DockerService] = {}
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _service_lock(self) -> asyncio.Lock:
        # Locks bind to the loop that first waits on them; the singleton outlives loops.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    @property
    def services_dir(self) -> Path:
        return self._services_dir or get_services_dir()

    async def get_service(self, identifier: str, config: Optional[Mapping[str, Any]] = None) -> DockerService:
        """Return the handle for ``identifier``, loading it on first use."""

        cached = self._services.get(identifier)
        if cached is not None:
            return cached

        async with self._service_lock():
            cached = self._services.get(identifier)
            if cached is not None:
                return cached

            logger.info("Loading service: %s", identifier)
            try:
                if not is_github_identifier(identifier):
                    raise ServiceNotFoundError(identifier)
                service = self._load_from_checkout(identifier, config)
            except Exception as exc:
                logger.error("Failed to load service %s: %s", identifier, exc)
                raise ServiceCreationError(identifier, str(exc)) from exc

            self._services[identifier] = service
            logger.info("Service ready: %s", service.get_service_info().container_name)
            return service

    def _load_from_checkout(self, identifier: str, config: Optional[Mapping[str, Any]]) -> DockerService:
        github_ref = parse_github_identifier(identifier)
        service_directory = self.services_dir / github_ref.directory_name
        descriptor_path = service_directory / SERVICE_DESCRIPTOR_FILENAME
        if not descriptor_path.exists():
            raise FileNotFoundError(
                f"{SERVICE_DESCRIPTOR_FILENAME} not found in {service_directory}; "
                f"check out {github_ref.repository_url} (ref {github_ref.ref}) there first"
            )

        descriptor = ServiceDescriptor.load(descriptor_path)
        logger.info("Loaded service config: %s v%s", descriptor.name, descriptor.version)
        return ConfigurableDockerService(
            service_directory,
            descriptor,
            config,
            http_transport=self._http_transport,
        )

    def register_service(self, identifier: str, service: DockerService) -> None:
        """Register a prebuilt handle, replacing any cached one."""

        self._services[identifier] = service
        logger.debug("Registered service handle for %s", identifier)

    def has_service(self, identifier: str) -> bool:
        return identifier in self._services

    def clear_cache(self) -> None:
        self._services.clear()
        logger.info("Service cache cleared")

    def get_stats(self) -> Dict[str, int]:
        return {"cached_services": len(self._services)}


_service_registry: ServiceRegistry | None = None


def get_service_registry() -> ServiceRegistry:
    """Return the process-wide service registry."""

    global _service_registry
    if _service_registry is None:
        _service_registry = ServiceRegistry()
    return _service_registry


__all__ = [
    "GitHubServiceRef",
    "ServiceRegistry",
    "get_service_registry",
    "is_github_identifier",
    "parse_github_identifier",
]
