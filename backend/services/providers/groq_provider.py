import logging

import groq
from groq import AsyncGroq

from services.content_policy import ContentPolicy
from services.errors import UpstreamServiceError
from services.prompt_builder import Prompt
from services.providers.base import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.3-70b-versatile"


class GroqProvider(AIProvider):
    name = "groq"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        content_policy: ContentPolicy | None = None,
        client: AsyncGroq | None = None,
    ) -> None:
        super().__init__(content_policy)
        self._model = model
        self._client = client or AsyncGroq(api_key=api_key)

    async def complete(self, prompt: Prompt) -> str:
        create_kwargs = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
        }
        if prompt.json_output:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = await self._client.chat.completions.create(**create_kwargs)
        except groq.APIError as e:
            logger.error("Groq API error: %s", e)
            raise UpstreamServiceError(detail=str(e)) from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
