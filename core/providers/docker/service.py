"""Service handles for Docker-hosted media services.

A handle describes one containerised service (container name, ports, health
URL) and reports its state by probing the health URL over HTTP. It never runs
``docker`` itself; containers are started out of band from the service
checkout's compose file.
"""

from __future__ import annotations

import asyncio
import logging
import random
import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Literal, Mapping, Optional, Set, Tuple

import httpx

from config.services import (
    DEFAULT_HEALTH_PORT,
    DEFAULT_WAIT_TIMEOUT_SECONDS,
    DYNAMIC_PORT_MAX,
    DYNAMIC_PORT_MIN,
    HEALTH_CHECK_TIMEOUT_SECONDS,
    HEALTH_POLL_INTERVAL_SECONDS,
)
from core.providers.docker.descriptor import ServiceDescriptor

logger = logging.getLogger(__name__)

ServiceHealth = Literal["healthy", "unhealthy", "starting", "none"]

PORT_PLACEHOLDER = "__PORT__"
_PORT_ALLOCATION_ATTEMPTS = 50


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    """Static description of a service container."""

    container_name: str
    docker_image: str
    ports: Tuple[int, ...]
    compose_service: str
    compose_file: str
    health_check_url: str
    network: str
    service_directory: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "container_name": self.container_name,
            "docker_image": self.docker_image,
            "ports": list(self.ports),
            "compose_service": self.compose_service,
            "compose_file": self.compose_file,
            "health_check_url": self.health_check_url,
            "network": self.network,
            "service_directory": self.service_directory,
        }


@dataclass(frozen=True, slots=True)
class ServiceStatus:
    """Point-in-time state of a service, fetched on demand."""

    running: bool
    health: ServiceHealth
    state: str
    container_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "health": self.health,
            "state": self.state,
            "container_id": self.container_id,
        }


class DockerService(ABC):
    """Handle for a containerised service resolved by the service registry.

    Subclasses may also implement ``async start_service() -> bool`` and
    ``async stop_service() -> bool``; providers call them only when present.
    """

    @abstractmethod
    def get_service_info(self) -> ServiceInfo:
        """Return the static container description."""

    @abstractmethod
    async def get_service_status(self) -> ServiceStatus:
        """Fetch the current state of the service."""

    async def is_service_running(self) -> bool:
        status = await self.get_service_status()
        return status.running

    async def is_service_healthy(self) -> bool:
        status = await self.get_service_status()
        return status.running and status.health == "healthy"

    async def wait_for_healthy(
        self,
        timeout_seconds: float = DEFAULT_WAIT_TIMEOUT_SECONDS,
        *,
        poll_interval: float = HEALTH_POLL_INTERVAL_SECONDS,
    ) -> bool:
        """Poll the service until it is healthy or ``timeout_seconds`` elapses.

        Returns ``False`` straight away when the service reports itself
        unhealthy; ``starting`` and unreachable states keep polling.
        """

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_seconds
        name = self.get_service_info().container_name

        while True:
            status = await self.get_service_status()
            logger.debug(
                "Health probe for %s: running=%s health=%s state=%s",
                name,
                status.running,
                status.health,
                status.state,
            )
            if status.running and status.health == "healthy":
                return True
            if status.running and status.health == "unhealthy":
                logger.error("Service %s reported unhealthy", name)
                return False

            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            await asyncio.sleep(min(poll_interval, remaining))

        logger.error("Service %s did not become healthy within %.0fs", name, timeout_seconds)
        return False


def _port_is_free(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind(("127.0.0.1", port))
        except OSError:
            return False
    return True


class ConfigurableDockerService(DockerService):
    """Service handle built from a ``MediaConduit.service.yml`` descriptor."""

    # Ports handed out to any handle in this process
    _allocated_ports: ClassVar[Set[int]] = set()

    def __init__(
        self,
        service_directory: str | Path,
        descriptor: ServiceDescriptor,
        user_config: Optional[Mapping[str, Any]] = None,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.service_directory = Path(service_directory)
        self.descriptor = descriptor
        self.user_config: Dict[str, Any] = dict(user_config or {})
        self._http_transport = http_transport
        self._ports: Tuple[int, ...] = tuple(self._assign_port(port) for port in descriptor.docker.ports)
        self._health_check_url = self._build_health_check_url()

    @classmethod
    def _assign_port(cls, port: int) -> int:
        if port != 0:
            return port

        candidates = range(DYNAMIC_PORT_MIN, DYNAMIC_PORT_MAX + 1)
        for _ in range(_PORT_ALLOCATION_ATTEMPTS):
            candidate = random.choice(candidates)
            if candidate in cls._allocated_ports or not _port_is_free(candidate):
                continue
            cls._allocated_ports.add(candidate)
            logger.info("Assigned dynamic port %s", candidate)
            return candidate

        # Bind checks kept failing; settle for a port not handed out yet
        unused = [candidate for candidate in candidates if candidate not in cls._allocated_ports]
        if not unused:
            raise RuntimeError(f"No dynamic ports left between {DYNAMIC_PORT_MIN} and {DYNAMIC_PORT_MAX}")
        candidate = random.choice(unused)
        cls._allocated_ports.add(candidate)
        logger.warning("Assigned dynamic port %s without a bind check", candidate)
        return candidate

    def _build_health_check_url(self) -> str:
        override = self.user_config.get("health_check_url")
        if override:
            return str(override)

        first_port = self._ports[0] if self._ports else None
        health_check = self.descriptor.docker.health_check
        if health_check and health_check.url:
            if first_port is not None:
                return health_check.url.replace(PORT_PLACEHOLDER, str(first_port))
            return health_check.url
        return f"http://localhost:{first_port or DEFAULT_HEALTH_PORT}/health"

    @property
    def ports(self) -> Tuple[int, ...]:
        return self._ports

    @property
    def health_check_url(self) -> str:
        return self._health_check_url

    @property
    def container_name(self) -> str:
        return f"{self.descriptor.name}-{self.descriptor.docker.service_name}"

    def get_service_info(self) -> ServiceInfo:
        docker = self.descriptor.docker
        return ServiceInfo(
            container_name=self.container_name,
            docker_image=docker.image or "unknown",
            ports=self._ports,
            compose_service=docker.service_name,
            compose_file=str(self.service_directory / docker.compose_file),
            health_check_url=self._health_check_url,
            network=f"{self.descriptor.name}-network",
            service_directory=str(self.service_directory),
        )

    def get_environment(self) -> Dict[str, str]:
        """Environment for ``docker compose`` including assigned host ports."""

        environment = dict(self.descriptor.docker.environment)
        if self._ports:
            key = self.descriptor.docker.service_name.upper().replace("-", "_")
            environment[f"{key}_HOST_PORT"] = str(self._ports[0])
        return environment

    def get_assigned_ports(self) -> List[int]:
        return list(self._ports)

    async def get_service_status(self) -> ServiceStatus:
        url = self._health_check_url
        async with httpx.AsyncClient(timeout=HEALTH_CHECK_TIMEOUT_SECONDS, transport=self._http_transport) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                logger.debug("Health check %s unreachable: %s", url, exc)
                return ServiceStatus(running=False, health="none", state="unreachable")

        logger.debug("Health check %s returned %s", url, response.status_code)
        if response.is_success:
            return ServiceStatus(running=True, health="healthy", state="running", container_id=self.container_name)
        if response.status_code == 503:
            # Model-loading services answer 503 until ready
            return ServiceStatus(running=True, health="starting", state="running", container_id=self.container_name)
        return ServiceStatus(running=True, health="unhealthy", state="running", container_id=self.container_name)


__all__ = [
    "ConfigurableDockerService",
    "DockerService",
    "PORT_PLACEHOLDER",
    "ServiceHealth",
    "ServiceInfo",
    "ServiceStatus",
]
