import base64
import json

import httpx
import pytest

from services.errors import ConfigurationError, UpstreamServiceError
from services.speech import ElevenLabsClient


def _client(handler, api_key="test-key", **kwargs) -> ElevenLabsClient:
    return ElevenLabsClient(api_key, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_synthesize_returns_base64_audio():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, content=b"\x49\x44\x33audio")

    result = await _client(handler, voice_id="voice123").synthesize("Hello")

    assert base64.b64decode(result.audio) == b"ID3audio"
    assert result.content_type == "audio/mpeg"
    assert seen["url"] == "https://api.elevenlabs.io/v1/text-to-speech/voice123"
    assert seen["headers"]["xi-api-key"] == "test-key"
    assert seen["headers"]["accept"] == "audio/mpeg"
    assert seen["body"] == {
        "text": "Hello",
        "model_id": "eleven_turbo_v2_5",
        "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
    }


@pytest.mark.asyncio
async def test_error_status_is_upstream_error():
    client = _client(lambda request: httpx.Response(401, json={"detail": "bad key"}))
    with pytest.raises(UpstreamServiceError) as exc_info:
        await client.synthesize("Hello")
    assert exc_info.value.message == "Failed to generate speech"


@pytest.mark.asyncio
async def test_transport_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamServiceError):
        await _client(handler).synthesize("Hello")


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", "   ", "your_elevenlabs_api_key_here"])
async def test_missing_key_is_configuration_error(api_key):
    def handler(request):
        raise AssertionError("no request expected")

    client = _client(handler, api_key=api_key)
    assert not client.configured
    with pytest.raises(ConfigurationError) as exc_info:
        await client.synthesize("Hello")
    assert exc_info.value.message == "ElevenLabs API key not configured"
