from pathlib import Path

import pytest

import config
from config.docker import CAPABILITY_PRIORITY
from config.docker.providers import cowsay, ffmpeg
from config.services import get_services_dir


def test_config_lazily_exposes_submodules():
    assert config.services.SERVICE_DESCRIPTOR_FILENAME == "MediaConduit.service.yml"

    with pytest.raises(AttributeError):
        getattr(config, "database")


def test_services_dir_follows_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SERVICES_DIR", str(tmp_path))
    assert get_services_dir() == tmp_path

    monkeypatch.delenv("SERVICES_DIR")
    assert get_services_dir() == Path("temp/services")


def test_priority_lists_reference_declared_providers():
    assert CAPABILITY_PRIORITY["text-to-audio"][0] == "chatterbox-docker"
    assert "cowsay-docker-provider" in CAPABILITY_PRIORITY["text-to-text"]


def test_provider_defaults():
    assert cowsay.DEFAULT_SERVICE_URL == "https://github.com/MediaConduit/cowsay-service"
    assert set(ffmpeg.MODEL_ENDPOINTS) == {
        "ffmpeg-video-to-audio",
        "ffmpeg-audio-to-audio",
        "ffmpeg-video-filter",
    }
