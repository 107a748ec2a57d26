import httpx
import pytest

from config.services import DYNAMIC_PORT_MAX, DYNAMIC_PORT_MIN
from core.providers.docker.descriptor import ServiceDescriptor
from core.providers.docker.service import ConfigurableDockerService
from tests.helpers import HEALTHY, STARTING, UNHEALTHY, UNREACHABLE, FakeDockerService, descriptor_data


def _service(tmp_path, transport=None, user_config=None, **overrides) -> ConfigurableDockerService:
    descriptor = ServiceDescriptor.model_validate(descriptor_data(**overrides))
    return ConfigurableDockerService(tmp_path, descriptor, user_config, http_transport=transport)


def _status_transport(status_code: int) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status_code, json={"status": "ok"}))


def test_service_info_from_descriptor(tmp_path):
    info = _service(tmp_path).get_service_info()

    assert info.container_name == "chatterbox-service-chatterbox-tts-server"
    assert info.docker_image == "devnen/chatterbox-tts-server:latest"
    assert info.ports == (8004,)
    assert info.compose_service == "chatterbox-tts-server"
    assert info.compose_file == str(tmp_path / "docker-compose.yml")
    assert info.health_check_url == "http://localhost:8004/health"
    assert info.network == "chatterbox-service-network"
    assert info.to_dict()["ports"] == [8004]


def test_missing_image_and_health_check_fall_back(tmp_path):
    service = _service(
        tmp_path,
        docker={"image": None, "healthCheck": None, "ports": []},
    )

    info = service.get_service_info()
    assert info.docker_image == "unknown"
    assert info.health_check_url == "http://localhost:8080/health"


def test_user_config_overrides_health_url(tmp_path):
    service = _service(tmp_path, user_config={"health_check_url": "http://gpu-box:9000/ready"})

    assert service.health_check_url == "http://gpu-box:9000/ready"


def test_dynamic_ports_are_unique_and_in_range(tmp_path):
    first = _service(tmp_path, docker={"ports": [0]})
    second = _service(tmp_path, docker={"ports": [0]})

    (first_port,) = first.get_assigned_ports()
    (second_port,) = second.get_assigned_ports()
    assert DYNAMIC_PORT_MIN <= first_port <= DYNAMIC_PORT_MAX
    assert DYNAMIC_PORT_MIN <= second_port <= DYNAMIC_PORT_MAX
    assert first_port != second_port
    assert first.health_check_url == f"http://localhost:{first_port}/health"


def test_environment_includes_host_port(tmp_path):
    environment = _service(tmp_path).get_environment()

    assert environment == {"CUDA_VISIBLE_DEVICES": "0", "CHATTERBOX_TTS_SERVER_HOST_PORT": "8004"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "running", "health"),
    [(200, True, "healthy"), (503, True, "starting"), (500, True, "unhealthy")],
)
async def test_status_follows_health_response(tmp_path, status_code, running, health):
    service = _service(tmp_path, transport=_status_transport(status_code))

    status = await service.get_service_status()

    assert status.running is running
    assert status.health == health
    assert status.state == "running"


@pytest.mark.asyncio
async def test_status_when_unreachable(tmp_path):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = _service(tmp_path, transport=httpx.MockTransport(refuse))

    status = await service.get_service_status()

    assert status.running is False
    assert status.health == "none"
    assert status.state == "unreachable"
    assert await service.is_service_running() is False
    assert await service.is_service_healthy() is False


@pytest.mark.asyncio
async def test_wait_for_healthy_polls_through_startup():
    service = FakeDockerService(statuses=[UNREACHABLE, STARTING, HEALTHY])

    assert await service.wait_for_healthy(5, poll_interval=0.01) is True
    assert service.status_calls == 3


@pytest.mark.asyncio
async def test_wait_for_healthy_stops_on_unhealthy():
    service = FakeDockerService(statuses=[UNHEALTHY, HEALTHY])

    assert await service.wait_for_healthy(5, poll_interval=0.01) is False
    assert service.status_calls == 1


@pytest.mark.asyncio
async def test_wait_for_healthy_times_out():
    service = FakeDockerService(statuses=[STARTING])

    assert await service.wait_for_healthy(0.05, poll_interval=0.01) is False
    assert service.status_calls >= 2
