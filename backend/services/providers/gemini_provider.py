"""Google Gemini provider."""

import logging

import httpx
from google import genai
from google.genai import errors, types

from services.content_policy import ContentPolicy
from services.errors import UpstreamServiceError
from services.prompt_builder import Prompt
from services.providers.base import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiProvider(AIProvider):
    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        content_policy: ContentPolicy | None = None,
        client: genai.Client | None = None,
    ) -> None:
        super().__init__(content_policy)
        self._model = model
        self._client = client or genai.Client(api_key=api_key)

    def _config(self, prompt: Prompt) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=prompt.system,
            temperature=prompt.temperature,
            max_output_tokens=prompt.max_tokens,
            # thinking tokens count against max_output_tokens; the YES/NO and
            # MATCH prompts only get a handful
            thinking_config=types.ThinkingConfig(thinking_budget=0),
            response_mime_type="application/json" if prompt.json_output else None,
        )

    async def complete(self, prompt: Prompt) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt.user,
                config=self._config(prompt),
            )
        except errors.APIError as e:
            logger.error("Gemini API error: %s", e)
            raise UpstreamServiceError(detail=str(e)) from e
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise UpstreamServiceError(detail=str(e)) from e

        return (response.text or "").strip()
