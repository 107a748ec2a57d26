"""Shared test doubles and descriptor builders."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

import httpx
import yaml

from config.services import SERVICE_DESCRIPTOR_FILENAME
from core.providers.docker.provider_base import AbstractDockerProvider
from core.providers.docker.registry import ServiceRegistry
from core.providers.docker.service import DockerService, ServiceInfo, ServiceStatus

HEALTHY = ServiceStatus(running=True, health="healthy", state="running", container_id="fake")
UNHEALTHY = ServiceStatus(running=True, health="unhealthy", state="running", container_id="fake")
STARTING = ServiceStatus(running=True, health="starting", state="running", container_id="fake")
UNREACHABLE = ServiceStatus(running=False, health="none", state="unreachable")


class FakeDockerService(DockerService):
    """Service handle returning scripted statuses."""

    def __init__(
        self,
        *,
        ports: Sequence[int] = (8123,),
        statuses: Optional[Iterable[ServiceStatus]] = None,
        name: str = "fake-service",
    ) -> None:
        self.ports = tuple(ports)
        self.statuses: List[ServiceStatus] = list(statuses or [HEALTHY])
        self.name = name
        self.status_calls = 0

    def get_service_info(self) -> ServiceInfo:
        port = self.ports[0] if self.ports else 8080
        return ServiceInfo(
            container_name=self.name,
            docker_image="fake/image:latest",
            ports=self.ports,
            compose_service="fake",
            compose_file="/tmp/fake/docker-compose.yml",
            health_check_url=f"http://localhost:{port}/health",
            network="fake-network",
            service_directory="/tmp/fake",
        )

    async def get_service_status(self) -> ServiceStatus:
        status = self.statuses[min(self.status_calls, len(self.statuses) - 1)]
        self.status_calls += 1
        return status


class LifecycleFakeDockerService(FakeDockerService):
    """Fake handle that also implements start/stop."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.started = False

    async def start_service(self) -> bool:
        self.started = True
        return True

    async def stop_service(self) -> bool:
        self.started = False
        return True


def descriptor_data(**overrides: Any) -> Dict[str, Any]:
    """Descriptor dict in the camelCase layout used by service repositories."""

    data: Dict[str, Any] = {
        "name": "chatterbox-service",
        "version": "1.0.0",
        "description": "Chatterbox TTS server",
        "docker": {
            "composeFile": "docker-compose.yml",
            "serviceName": "chatterbox-tts-server",
            "image": "devnen/chatterbox-tts-server:latest",
            "ports": [8004],
            "healthCheck": {
                "url": "http://localhost:__PORT__/health",
                "interval": "30s",
                "timeout": "10s",
                "retries": 3,
            },
            "environment": {"CUDA_VISIBLE_DEVICES": 0},
        },
        "capabilities": ["text-to-audio"],
        "requirements": {"gpu": True, "memory": "4GB"},
    }
    docker_overrides = overrides.pop("docker", None)
    data.update(overrides)
    if docker_overrides:
        data["docker"] = {**data["docker"], **docker_overrides}
    return data


def write_descriptor(services_dir: Path, owner: str, repo: str, data: Optional[Dict[str, Any]] = None) -> Path:
    """Write ``MediaConduit.service.yml`` into ``<services_dir>/<owner>-<repo>``."""

    directory = services_dir / f"{owner}-{repo}"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / SERVICE_DESCRIPTOR_FILENAME
    path.write_text(yaml.safe_dump(data or descriptor_data()), encoding="utf-8")
    return path


ProviderT = TypeVar("ProviderT", bound=AbstractDockerProvider)


def registry_with(identifier: str, service: DockerService, services_dir: Optional[Path] = None) -> ServiceRegistry:
    registry = ServiceRegistry(services_dir or Path("/nonexistent-services"))
    registry.register_service(identifier, service)
    return registry


def provider_with(
    provider_class: Type[ProviderT],
    service: Optional[DockerService] = None,
    handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
) -> ProviderT:
    """Build ``provider_class`` over a fake service handle and a mock HTTP transport."""

    service = service or FakeDockerService()
    transport = httpx.MockTransport(handler or (lambda request: httpx.Response(404)))
    return provider_class(
        service_registry=registry_with(provider_class.default_service_url, service),
        http_transport=transport,
    )


__all__ = [
    "FakeDockerService",
    "HEALTHY",
    "LifecycleFakeDockerService",
    "STARTING",
    "UNHEALTHY",
    "UNREACHABLE",
    "descriptor_data",
    "provider_with",
    "registry_with",
    "write_descriptor",
]
