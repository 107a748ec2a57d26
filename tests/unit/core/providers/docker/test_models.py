import base64
import json
from types import SimpleNamespace
from typing import List

import httpx
import pytest

from config.docker.providers import ollama as ollama_config
from core.exceptions import ProviderError, ValidationError
from core.providers.docker import (
    ChatterboxDockerProvider,
    CowsayDockerProvider,
    FFMPEGDockerProvider,
    KokoroDockerProvider,
    OllamaDockerProvider,
    WhisperDockerProvider,
    ZonosDockerProvider,
)
from core.providers.docker.model_base import DockerMediaModel
from core.providers.types import AudioResult, MediaResult, TextResult
from tests.helpers import FakeDockerService, provider_with


class Recorder:
    """Mock transport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    def json_body(self, index: int = -1):
        return json.loads(self.requests[index].content)


async def _model(provider_class, model_id, recorder):
    provider = provider_with(provider_class, FakeDockerService(ports=(18000,)), handler=recorder)
    return await provider.get_model(model_id)


def test_extract_text_variants():
    assert DockerMediaModel.extract_text("hello") == "hello"
    assert DockerMediaModel.extract_text(SimpleNamespace(content="from content")) == "from content"
    assert DockerMediaModel.extract_text(SimpleNamespace(text="from text")) == "from text"
    assert DockerMediaModel.extract_text(["first", "second"]) == "first"

    for empty in ("", "   ", [], SimpleNamespace(content="")):
        with pytest.raises(ValidationError) as excinfo:
            DockerMediaModel.extract_text(empty)
        assert excinfo.value.field == "input"


def test_extract_bytes_variants():
    assert DockerMediaModel.extract_bytes(b"abc") == b"abc"
    assert DockerMediaModel.extract_bytes(SimpleNamespace(data=bytearray(b"xyz"))) == b"xyz"
    with pytest.raises(ValidationError):
        DockerMediaModel.extract_bytes(b"", field="audio")


@pytest.mark.asyncio
async def test_cowsay_transform():
    recorder = Recorder(httpx.Response(200, json={"output": " _____\n< moo >"}))
    model = await _model(CowsayDockerProvider, "cowsay-default", recorder)

    result = await model.transform("moo", cow="tux")

    assert isinstance(result, TextResult)
    assert result.text == " _____\n< moo >"
    assert str(recorder.requests[0].url) == "http://localhost:18000/cowsay"
    assert recorder.json_body() == {"text": "moo", "cow": "tux"}


@pytest.mark.asyncio
async def test_cowsay_service_error_raises_provider_error():
    model = await _model(CowsayDockerProvider, "cowsay-default", Recorder(httpx.Response(502)))

    with pytest.raises(ProviderError):
        await model.transform("moo")


@pytest.mark.asyncio
async def test_chatterbox_predefined_voice():
    recorder = Recorder(httpx.Response(200, content=b"ID3audio"))
    model = await _model(ChatterboxDockerProvider, "chatterbox-tts", recorder)

    result = await model.transform("Hello there", voice="Emma.wav", format="wav", speed=1.2)

    assert isinstance(result, AudioResult)
    assert result.audio_bytes == b"ID3audio"
    assert result.format == "wav"
    assert result.voice == "Emma.wav"
    assert recorder.json_body() == {
        "text": "Hello there",
        "voice_mode": "predefined",
        "output_format": "wav",
        "split_text": True,
        "predefined_voice_id": "Emma.wav",
        "speed_factor": 1.2,
    }


@pytest.mark.asyncio
async def test_chatterbox_rejects_bad_input():
    model = await _model(ChatterboxDockerProvider, "chatterbox-tts", Recorder(httpx.Response(200, content=b"x")))

    with pytest.raises(ValidationError) as too_long:
        await model.transform("a" * 5001)
    with pytest.raises(ValidationError) as bad_format:
        await model.transform("hi", format="ogg")

    assert too_long.value.field == "input"
    assert bad_format.value.field == "format"


@pytest.mark.asyncio
async def test_chatterbox_skips_upload_for_known_reference(tmp_path):
    voice_file = tmp_path / "narrator.wav"
    voice_file.write_bytes(b"RIFFdata")
    recorder = Recorder(
        httpx.Response(200, json=["narrator.wav"]),
        httpx.Response(200, content=b"cloned-audio"),
    )
    model = await _model(ChatterboxDockerProvider, "chatterbox-tts", recorder)

    result = await model.transform("Clone me", voice_file=str(voice_file))

    assert [request.url.path for request in recorder.requests] == ["/get_reference_files", "/tts"]
    assert recorder.json_body()["voice_mode"] == "clone"
    assert recorder.json_body()["reference_audio_filename"] == "narrator.wav"
    assert result.voice == "narrator.wav"


@pytest.mark.asyncio
async def test_chatterbox_uploads_new_reference():
    recorder = Recorder(
        httpx.Response(200, json={"uploaded_files": ["voice_clone_1.wav"]}),
        httpx.Response(200, content=b"cloned-audio"),
    )
    model = await _model(ChatterboxDockerProvider, "chatterbox-tts", recorder)

    await model.transform("Clone me", voice_to_clone=b"RIFFdata", force_upload=True)

    upload, tts = recorder.requests
    assert upload.url.path == "/upload_reference"
    assert b"RIFFdata" in upload.content
    assert json.loads(tts.content)["reference_audio_filename"] == "voice_clone_1.wav"


@pytest.mark.asyncio
async def test_chatterbox_missing_voice_file(tmp_path):
    model = await _model(ChatterboxDockerProvider, "chatterbox-tts", Recorder(httpx.Response(200)))

    with pytest.raises(ValidationError) as excinfo:
        await model.transform("hi", voice_file=str(tmp_path / "missing.wav"))

    assert excinfo.value.field == "voice_file"


@pytest.mark.asyncio
async def test_kokoro_transform_and_voices():
    recorder = Recorder(
        httpx.Response(200, content=b"mp3-bytes"),
        httpx.Response(200, json={"voices": ["af_bella", "am_adam"]}),
    )
    model = await _model(KokoroDockerProvider, "kokoro-82m", recorder)

    result = await model.transform("Hi Kokoro")
    voices = await model.list_voices()

    assert result.format == "mp3"
    assert result.voice == "af_bella"
    assert json.loads(recorder.requests[0].content) == {
        "model": "kokoro",
        "input": "Hi Kokoro",
        "voice": "af_bella",
        "response_format": "mp3",
        "speed": 1.0,
    }
    assert recorder.requests[0].url.path == "/v1/audio/speech"
    assert voices == ["af_bella", "am_adam"]


@pytest.mark.asyncio
async def test_zonos_transform_encodes_speaker_audio():
    recorder = Recorder(httpx.Response(200, content=b"wav-bytes"))
    model = await _model(ZonosDockerProvider, "zonos-tts", recorder)

    result = await model.transform("Bonjour", language="fr", speaker_audio=b"speaker")

    body = recorder.json_body()
    assert result.format == "wav"
    assert body["language"] == "fr"
    assert body["model"] == "Zyphra/Zonos-v0.1-transformer"
    assert base64.b64decode(body["speaker_audio"]) == b"speaker"
    assert "prefix_audio" not in body


@pytest.mark.asyncio
async def test_zonos_validates_options():
    model = await _model(ZonosDockerProvider, "zonos-tts", Recorder(httpx.Response(200, content=b"x")))

    with pytest.raises(ValidationError) as language:
        await model.transform("hi", language="xx")
    with pytest.raises(ValidationError) as model_choice:
        await model.transform("hi", model_choice="Zyphra/Unknown")

    assert language.value.field == "language"
    assert model_choice.value.field == "model_choice"


@pytest.mark.asyncio
async def test_whisper_transcription():
    recorder = Recorder(
        httpx.Response(200, json={"text": " hello world ", "language": "en", "segments": [{"id": 0}]})
    )
    model = await _model(WhisperDockerProvider, "whisper-base", recorder)

    result = await model.transform(b"RIFFaudio", language="en", filename="clip.wav")

    request = recorder.requests[0]
    assert request.url.path == "/asr"
    assert request.url.params["task"] == "transcribe"
    assert request.url.params["language"] == "en"
    assert b'name="audio_file"; filename="clip.wav"' in request.content
    assert result.text == "hello world"
    assert result.metadata["segments"] == [{"id": 0}]


@pytest.mark.asyncio
async def test_ffmpeg_extracts_audio():
    recorder = Recorder(httpx.Response(200, content=b"mp3", headers={"content-type": "audio/mpeg"}))
    model = await _model(FFMPEGDockerProvider, "ffmpeg-video-to-audio", recorder)

    result = await model.transform(SimpleNamespace(data=b"mp4-bytes", filename="movie.mp4"), sample_rate=44100)

    request = recorder.requests[0]
    assert isinstance(result, MediaResult)
    assert result.content == b"mp3"
    assert result.content_type == "audio/mpeg"
    assert request.url.path == "/video/extract-audio"
    assert b'name="output_format"' in request.content
    assert b'name="sample_rate"' in request.content
    assert b'filename="movie.mp4"' in request.content


@pytest.mark.asyncio
async def test_ollama_refreshes_installed_models_once():
    recorder = Recorder(httpx.Response(200, json={"models": [{"name": "mistral:7b"}, {"name": "llama3.2:1b"}]}))
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    await provider.ensure_initialized()
    models = await provider.refresh_models()

    assert models == ["llama3.2:1b", "llama3.2:3b", "qwen2.5:0.5b", "mistral:7b"]
    assert len(recorder.requests) == 1
    assert provider.supports_model("mistral:7b")

    await provider.refresh_models(force=True)
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_ollama_get_model_finds_discovered_models_without_prior_init():
    recorder = Recorder(httpx.Response(200, json={"models": [{"name": "mistral:7b"}]}))
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    model = await provider.get_model("mistral:7b")

    assert model.id == "mistral:7b"
    assert provider.is_initialized is True
    assert [request.url.path for request in recorder.requests] == ["/api/tags"]


@pytest.mark.asyncio
async def test_ollama_catalog_refreshes_after_ttl():
    recorder = Recorder(
        httpx.Response(200, json={"models": []}),
        httpx.Response(200, json={"models": [{"name": "phi3:mini"}]}),
    )
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    await provider.ensure_initialized()
    assert not provider.supports_model("phi3:mini")

    provider._models_fetched_at -= ollama_config.MODEL_CACHE_TTL_SECONDS + 1
    model = await provider.get_model("phi3:mini")

    assert model.id == "phi3:mini"
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_ollama_pulls_missing_model_on_create_then_generates():
    recorder = Recorder(
        httpx.Response(200, json={"models": []}),
        httpx.Response(200, json={"models": []}),
        httpx.Response(200, json={"status": "success"}),
        httpx.Response(200, json={"models": [{"name": "llama3.2:1b"}]}),
        httpx.Response(200, json={"response": "Hi!", "done": True, "eval_count": 3}),
    )
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    model = await provider.get_model("llama3.2:1b")
    result = await model.transform("Say hi", max_tokens=16, system="Be brief")

    assert [request.url.path for request in recorder.requests] == [
        "/api/tags",
        "/api/tags",
        "/api/pull",
        "/api/tags",
        "/api/generate",
    ]
    assert recorder.json_body(2) == {"name": "llama3.2:1b", "stream": False}
    generate = recorder.json_body()
    assert generate["model"] == "llama3.2:1b"
    assert generate["stream"] is False
    assert generate["options"] == {"temperature": 0.7, "num_predict": 16}
    assert generate["system"] == "Be brief"
    assert result.text == "Hi!"
    assert "llama3.2:1b" in provider._discovered_models


@pytest.mark.asyncio
async def test_ollama_create_fails_when_pull_fails():
    recorder = Recorder(
        httpx.Response(200, json={"models": []}),
        httpx.Response(200, json={"models": []}),
        httpx.Response(200, json={"status": "error"}),
    )
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    with pytest.raises(ProviderError) as excinfo:
        await provider.create_model("qwen2.5:0.5b")

    assert "Failed to ensure model qwen2.5:0.5b is available" in str(excinfo.value)


@pytest.mark.asyncio
async def test_ollama_installed_model_skips_pull():
    recorder = Recorder(httpx.Response(200, json={"models": [{"name": "llama3.2:3b"}]}))
    provider = provider_with(OllamaDockerProvider, FakeDockerService(ports=(18000,)), handler=recorder)

    await provider.create_model("llama3.2:3b")
    model = await provider.create_model("llama3.2:3b")

    assert await model.ensure_available() is True
    assert "/api/pull" not in [request.url.path for request in recorder.requests]


@pytest.mark.asyncio
async def test_ollama_missing_response_text():
    recorder = Recorder(
        httpx.Response(200, json={"models": [{"name": "llama3.2:1b"}]}),
        httpx.Response(200, json={"done": True}),
    )
    model = await _model(OllamaDockerProvider, "llama3.2:1b", recorder)

    with pytest.raises(ProviderError):
        await model.transform("hello")
