import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from services.content_policy import KeywordContentPolicy
from services.errors import AssistantError
from services.providers.factory import create_provider
from services.speech import ElevenLabsClient

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing AI credentials are fatal here, not on the first request
    app.state.ai_provider = create_provider(
        settings, KeywordContentPolicy(settings.content_denylist)
    )
    app.state.speech_client = ElevenLabsClient(
        settings.elevenlabs_api_key,
        voice_id=settings.voice_id,
        model_id=settings.elevenlabs_model,
        timeout_s=settings.tts_timeout_s,
    )
    if not app.state.speech_client.configured:
        logger.warning("ELEVENLABS_API_KEY not set, text-to-speech is disabled")
    yield


app = FastAPI(
    title="Career Assistant API",
    description="AI-assisted resume feedback, cover letters and interview practice",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log("%s on %s: %s (%s)", type(exc).__name__, request.url.path, exc.message, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    fields = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
    field = fields[-1] if fields else "request body"
    if error.get("type") in ("missing", "string_too_short"):
        return f"{field} is required"
    return f"Invalid {field}: {error.get('msg', 'bad value')}"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.warning("Rejected request on %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


app.include_router(router)
