"""Tests for gemini_service.GeminiClient with the SDK model patched out."""

import asyncio
from types import SimpleNamespace

import pytest

import gemini_service
from gemini_service import ExternalServiceError, GeminiClient, get_gemini_client


def _response(*texts):
    parts = [SimpleNamespace(text=t) for t in texts]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class FakeModel:
    behaviour = None
    last_call = None

    def __init__(self, model_name):
        self.model_name = model_name

    async def generate_content_async(self, prompt, generation_config=None, request_options=None):
        FakeModel.last_call = (prompt, generation_config, request_options)
        return await FakeModel.behaviour()


@pytest.fixture
def fake_sdk(monkeypatch):
    monkeypatch.setattr(gemini_service.genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(gemini_service.genai, "GenerativeModel", FakeModel)
    yield FakeModel
    FakeModel.behaviour = None
    FakeModel.last_call = None


def test_generate_joins_text_parts(fake_sdk):
    async def reply():
        return _response("Hello ", "there!")
    fake_sdk.behaviour = reply

    client = GeminiClient("key", model_name="gemini-test", timeout=5)
    text = asyncio.run(client.generate("hi", {"temperature": 0.8, "top_k": 40}))

    assert text == "Hello there!"
    prompt, config, options = fake_sdk.last_call
    assert prompt == "hi"
    assert config.temperature == 0.8
    assert config.top_k == 40
    assert options == {"timeout": 5}


def test_empty_response_is_an_error(fake_sdk):
    async def reply():
        return SimpleNamespace(candidates=[])
    fake_sdk.behaviour = reply

    with pytest.raises(ExternalServiceError):
        asyncio.run(GeminiClient("key").generate("hi"))


def test_sdk_errors_are_wrapped(fake_sdk):
    async def reply():
        raise ConnectionError("network unreachable")
    fake_sdk.behaviour = reply

    with pytest.raises(ExternalServiceError) as excinfo:
        asyncio.run(GeminiClient("key").generate("hi"))
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_hanging_call_times_out(fake_sdk):
    async def reply():
        await asyncio.sleep(5)
    fake_sdk.behaviour = reply

    with pytest.raises(ExternalServiceError, match="timed out"):
        asyncio.run(GeminiClient("key", timeout=0.05).generate("hi"))


def test_no_credential_means_no_client(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert get_gemini_client() is None

    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    assert get_gemini_client() is None


def test_credential_builds_configured_client(monkeypatch, fake_sdk):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")

    client = get_gemini_client()

    assert isinstance(client, GeminiClient)
    assert client.model_name == "gemini-2.0-flash"
    assert client.timeout == 20
