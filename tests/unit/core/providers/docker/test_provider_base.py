import httpx
import pytest

from core.exceptions import ProviderError, ServiceError
from core.providers.capabilities import ProviderType
from core.providers.docker import CowsayDockerProvider, KokoroDockerProvider
from core.providers.docker.registry import ServiceRegistry
from tests.helpers import (
    HEALTHY,
    STARTING,
    UNHEALTHY,
    UNREACHABLE,
    FakeDockerService,
    LifecycleFakeDockerService,
    provider_with,
    registry_with,
)


class CountingRegistry(ServiceRegistry):
    def __init__(self, service):
        super().__init__("/nonexistent-services")
        self.service = service
        self.requested = []

    async def get_service(self, identifier, config=None):
        self.requested.append(identifier)
        return self.service


class FailingRegistry(ServiceRegistry):
    async def get_service(self, identifier, config=None):
        raise ServiceError(f"cannot resolve {identifier}")


def test_service_url_defaults_and_env_override(monkeypatch):
    provider = CowsayDockerProvider()
    assert provider.get_service_url() == "https://github.com/MediaConduit/cowsay-service"
    assert provider.type is ProviderType.LOCAL

    monkeypatch.setenv("COWSAY_SERVICE_URL", "github:someone/cowsay-fork@dev")
    assert provider.get_service_url() == "github:someone/cowsay-fork@dev"


def test_base_url_before_initialisation():
    provider = KokoroDockerProvider()

    assert provider.is_initialized is False
    assert provider.base_url == "http://localhost:8005"
    with pytest.raises(ProviderError):
        provider.get_docker_service()


@pytest.mark.asyncio
async def test_initialisation_happens_once():
    registry = CountingRegistry(FakeDockerService(ports=(38123,)))
    provider = KokoroDockerProvider(service_registry=registry)

    await provider.ensure_initialized()
    await provider.ensure_initialized()

    assert registry.requested == ["github:MediaConduit/kokoro-service"]
    assert provider.is_initialized is True
    assert provider.base_url == "http://localhost:38123"


@pytest.mark.asyncio
async def test_base_url_without_ports_uses_default():
    provider = provider_with(KokoroDockerProvider, FakeDockerService(ports=()))

    await provider.ensure_initialized()

    assert provider.base_url == "http://localhost:8005"


@pytest.mark.asyncio
async def test_empty_service_url_leaves_provider_uninitialised(monkeypatch):
    monkeypatch.setattr(KokoroDockerProvider, "default_service_url", None)
    provider = KokoroDockerProvider()

    await provider.ensure_initialized()

    assert provider.is_initialized is False
    assert await provider.is_available() is False


@pytest.mark.asyncio
async def test_configure_switches_service_and_base_url():
    replacement = FakeDockerService(ports=())
    registry = registry_with("github:acme/kokoro-gpu", replacement)
    provider = KokoroDockerProvider(service_registry=registry)

    await provider.configure({"serviceUrl": "github:acme/kokoro-gpu", "baseUrl": "http://gpu-box:8880"})

    assert provider.get_service_url() == "github:acme/kokoro-gpu"
    assert provider.get_docker_service() is replacement
    assert provider.base_url == "http://gpu-box:8880"


@pytest.mark.asyncio
async def test_lifecycle_calls_delegate_when_supported():
    service = LifecycleFakeDockerService()
    provider = provider_with(CowsayDockerProvider, service)

    assert await provider.start_service() is True
    assert service.started is True
    assert await provider.stop_service() is True
    assert service.started is False


@pytest.mark.asyncio
async def test_lifecycle_calls_without_support_return_false():
    provider = provider_with(CowsayDockerProvider, FakeDockerService())

    assert await provider.stop_service() is False
    assert await provider.start_service() is False


@pytest.mark.asyncio
async def test_start_service_reports_resolution_failure():
    provider = CowsayDockerProvider(service_registry=FailingRegistry("/nonexistent-services"))

    assert await provider.start_service() is False


@pytest.mark.asyncio
async def test_service_status_before_initialisation():
    status = await KokoroDockerProvider().get_service_status()

    assert status == {"running": False, "healthy": False, "error": "Service not initialised"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("service_status", "expected"),
    [
        (HEALTHY, {"running": True, "healthy": True, "error": None}),
        (STARTING, {"running": True, "healthy": False, "error": None}),
        (UNHEALTHY, {"running": True, "healthy": False, "error": None}),
        (UNREACHABLE, {"running": False, "healthy": False, "error": "unreachable"}),
    ],
)
async def test_service_status_maps_handle_state(service_status, expected):
    provider = provider_with(KokoroDockerProvider, FakeDockerService(statuses=[service_status]))
    await provider.ensure_initialized()

    assert await provider.get_service_status() == expected


@pytest.mark.asyncio
async def test_health_and_availability():
    provider = provider_with(KokoroDockerProvider, FakeDockerService(statuses=[HEALTHY]))
    await provider.ensure_initialized()

    health = await provider.get_health()

    assert health.status == "healthy"
    assert health.uptime_seconds >= 0
    assert health.last_error is None
    assert await provider.is_available() is True


@pytest.mark.asyncio
async def test_unhealthy_service_is_not_available():
    provider = provider_with(KokoroDockerProvider, FakeDockerService(statuses=[UNHEALTHY]))
    await provider.ensure_initialized()

    assert await provider.is_available() is False
    assert (await provider.get_health()).status == "unhealthy"


@pytest.mark.asyncio
async def test_model_reports_service_health():
    provider = provider_with(
        KokoroDockerProvider,
        FakeDockerService(statuses=[HEALTHY]),
        handler=lambda request: httpx.Response(500),
    )

    model = await provider.get_model("kokoro-tts")

    assert model.get_service() is provider.get_docker_service()
    assert await model.is_available() is True


def test_get_info_describes_provider():
    info = KokoroDockerProvider().get_info()

    assert info == {
        "id": "kokoro-docker",
        "name": "Kokoro Docker Provider",
        "type": "local",
        "capabilities": ["text-to-audio"],
        "models": ["kokoro-tts", "kokoro-82m", "kokoro-styletts2"],
        "service_url": "github:MediaConduit/kokoro-service",
        "base_url": "http://localhost:8005",
        "initialized": False,
    }
