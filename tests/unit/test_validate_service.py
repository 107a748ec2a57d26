import httpx
import pytest

import validate_service
from core.providers.docker.registry import ServiceRegistry
from tests.helpers import STARTING, UNREACHABLE, FakeDockerService, registry_with, write_descriptor


@pytest.mark.asyncio
async def test_reports_running_service(capsys):
    registry = registry_with("github:MediaConduit/chatterbox-service", FakeDockerService(statuses=[STARTING]))

    assert await validate_service.validate_service("github:MediaConduit/chatterbox-service", registry) is True

    out = capsys.readouterr().out
    assert "Container: fake-service" in out
    assert "Image: fake/image:latest" in out
    assert "Ports: 8123" in out
    assert "Running: True" in out
    assert "Health: starting" in out
    assert "Models are downloaded and loaded on first start" in out
    assert "✅ Service validation complete" in out
    assert "Repository: https://github.com/MediaConduit/chatterbox-service.git" in out


@pytest.mark.asyncio
async def test_points_at_compose_file_when_not_running(capsys):
    registry = registry_with("github:acme/tts", FakeDockerService(statuses=[UNREACHABLE]))

    assert await validate_service.validate_service("github:acme/tts", registry) is True

    assert "Start it with: docker compose -f /tmp/fake/docker-compose.yml up -d" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_loads_descriptor_from_checkout(services_dir, capsys):
    write_descriptor(services_dir, "MediaConduit", "chatterbox-service")
    refuse = httpx.MockTransport(lambda request: httpx.Response(500))
    registry = ServiceRegistry(services_dir, http_transport=refuse)

    assert await validate_service.validate_service("github:MediaConduit/chatterbox-service", registry) is True

    out = capsys.readouterr().out
    assert "Container: chatterbox-service-chatterbox-tts-server" in out
    assert "Health Check: http://localhost:8004/health" in out
    assert "Health: unhealthy" in out


def test_main_fails_for_missing_checkout(capsys):
    assert validate_service.main(["github:MediaConduit/missing-service"]) == 1

    captured = capsys.readouterr()
    assert "❌ Validation failed: Failed to create service 'github:MediaConduit/missing-service'" in captured.out
    assert "Traceback" in captured.err
