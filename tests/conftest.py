"""Test configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

# Explicitly opt-in to the async plugins we rely on; some runners disable
# plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD``.
pytest_plugins = ("anyio", "pytest_asyncio")

# Make ``import core`` and friends work from any working directory.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_SERVICE_URL_ENV_VARS = (
    "COWSAY_SERVICE_URL",
    "CHATTERBOX_SERVICE_URL",
    "KOKORO_SERVICE_URL",
    "ZONOS_SERVICE_URL",
    "WHISPER_SERVICE_URL",
    "OLLAMA_SERVICE_URL",
    "FFMPEG_SERVICE_URL",
)


@pytest.fixture(autouse=True)
def isolated_service_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep developer ``*_SERVICE_URL`` overrides and checkouts out of tests."""

    for name in _SERVICE_URL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SERVICES_DIR", str(tmp_path / "services"))
    yield


@pytest.fixture
def services_dir(tmp_path: Path) -> Path:
    path = tmp_path / "services"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
