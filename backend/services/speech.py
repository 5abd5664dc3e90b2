"""ElevenLabs text-to-speech proxy."""

import base64
import logging

import httpx

from models.responses import TextToSpeechResponse
from services.errors import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)

ELEVENLABS_TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"
DEFAULT_MODEL_ID = "eleven_turbo_v2_5"
AUDIO_CONTENT_TYPE = "audio/mpeg"
VOICE_SETTINGS = {"stability": 0.5, "similarity_boost": 0.75}

# Values shipped in example env files
_PLACEHOLDER_KEYS = frozenset({"your_elevenlabs_api_key_here"})


class ElevenLabsClient:
    def __init__(
        self,
        api_key: str,
        voice_id: str = DEFAULT_VOICE_ID,
        model_id: str = DEFAULT_MODEL_ID,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._voice_id = voice_id or DEFAULT_VOICE_ID
        self._model_id = model_id
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key) and self._api_key not in _PLACEHOLDER_KEYS

    async def synthesize(self, text: str) -> TextToSpeechResponse:
        """Convert text to MPEG audio, returned base64-encoded."""
        if not self.configured:
            raise ConfigurationError("ElevenLabs API key not configured")

        url = ELEVENLABS_TTS_URL.format(voice_id=self._voice_id)
        headers = {
            "Accept": AUDIO_CONTENT_TYPE,
            "Content-Type": "application/json",
            "xi-api-key": self._api_key,
        }
        payload = {"text": text, "model_id": self._model_id, "voice_settings": VOICE_SETTINGS}

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error("ElevenLabs request failed: %s", e)
            raise UpstreamServiceError("Failed to generate speech", detail=str(e)) from e

        if response.is_error:
            logger.error("ElevenLabs API error %s: %s", response.status_code, response.text[:300])
            raise UpstreamServiceError(
                "Failed to generate speech", detail=f"status {response.status_code}"
            )

        return TextToSpeechResponse(
            audio=base64.b64encode(response.content).decode("ascii"),
            content_type=AUDIO_CONTENT_TYPE,
        )
