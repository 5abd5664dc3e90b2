import os

from pydantic import Field
from pydantic_settings import BaseSettings

from services.content_policy import DEFAULT_BLOCKED_TERMS


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    # AI providers, first configured key wins unless ai_provider forces one
    groq_api_key: str = ""
    gemini_api_key: str = ""
    ai_provider: str = ""  # "" | "groq" | "gemini"
    groq_model: str = "llama-3.3-70b-versatile"
    gemini_model: str = "gemini-2.5-flash"

    # Text-to-speech
    elevenlabs_api_key: str = ""
    voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    elevenlabs_model: str = "eleven_turbo_v2_5"
    tts_timeout_s: float = 30.0

    # Uploads
    max_upload_size_mb: int = 5
    min_resume_chars: int = 100

    content_denylist: list[str] = Field(default_factory=lambda: list(DEFAULT_BLOCKED_TERMS))

    # Interview captions
    caption_lead_ms: int = 4000
    caption_floor_ms: int = 1000

    rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
