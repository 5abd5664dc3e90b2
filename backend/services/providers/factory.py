"""Provider selection, done once at startup.

The first provider in PROVIDER_PREFERENCE with a configured API key wins,
unless settings.ai_provider names one explicitly.
"""

import logging

from config import Settings
from services.content_policy import ContentPolicy
from services.errors import ConfigurationError
from services.providers.base import AIProvider

logger = logging.getLogger(__name__)

PROVIDER_PREFERENCE = ("groq", "gemini")


def _api_key(settings: Settings, name: str) -> str:
    if name == "groq":
        return settings.groq_api_key.strip()
    if name == "gemini":
        return settings.gemini_api_key.strip()
    raise ConfigurationError(f"Unknown AI provider: {name}")


def _create_provider(name: str, settings: Settings, content_policy: ContentPolicy) -> AIProvider:
    """Build a provider by name with deferred SDK imports."""
    api_key = _api_key(settings, name)
    if not api_key:
        raise ConfigurationError(f"{name.upper()}_API_KEY not found")

    if name == "groq":
        from services.providers.groq_provider import GroqProvider
        return GroqProvider(api_key, model=settings.groq_model, content_policy=content_policy)
    from services.providers.gemini_provider import GeminiProvider
    return GeminiProvider(api_key, model=settings.gemini_model, content_policy=content_policy)


def create_provider(settings: Settings, content_policy: ContentPolicy) -> AIProvider:
    forced = settings.ai_provider.strip().lower()
    if forced:
        provider = _create_provider(forced, settings, content_policy)
    else:
        name = next((n for n in PROVIDER_PREFERENCE if _api_key(settings, n)), None)
        if name is None:
            raise ConfigurationError(
                "No AI provider API key found. Please add GROQ_API_KEY or GEMINI_API_KEY to .env"
            )
        provider = _create_provider(name, settings, content_policy)

    logger.info("Using AI provider: %s", provider.name)
    return provider
