import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_ai_provider, get_speech_client
from config import settings
from models.requests import (
    AnalyzeInterviewTypesRequest,
    CoverLetterRequest,
    EvaluateAnswerRequest,
    InterviewQuestionsRequest,
    TextToSpeechRequest,
)
from models.responses import (
    ATSCheckResponse,
    CoverLetterResponse,
    EvaluateAnswerResponse,
    ExtractTextResponse,
    HealthResponse,
    InterviewQuestionsResponse,
    InterviewTypeAnalysis,
    ResumeAnalysis,
    ResumeSuggestions,
    TextToSpeechResponse,
)
from services import cover_letter_document, text_extractor
from services.errors import AssistantError, ValidationError
from services.providers.base import AIProvider
from services.speech import ElevenLabsClient

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


async def _read_resume(upload: UploadFile) -> str:
    """Read an uploaded resume and return its text, enforcing size and length limits."""
    content = await upload.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise ValidationError(f"File too large. Max size: {settings.max_upload_size_mb}MB")

    try:
        text = text_extractor.extract_text(content, upload.content_type, upload.filename)
    except Exception as e:
        logger.warning("Could not parse upload %r: %s", upload.filename, e)
        raise ValidationError("Could not parse the uploaded file", detail=str(e)) from e

    return text_extractor.ensure_resume_text(text, settings.min_resume_chars)


@router.get("/health", response_model=HealthResponse)
async def health(
    provider: AIProvider = Depends(get_ai_provider),
    speech: ElevenLabsClient = Depends(get_speech_client),
):
    return HealthResponse(provider=provider.name, tts_configured=speech.configured)


# --- Resume analysis ---


@router.post("/api/analyze-resume", response_model=ResumeAnalysis)
@limiter.limit(settings.rate_limit)
async def analyze_resume(
    request: Request,
    resume: UploadFile = File(...),
    provider: AIProvider = Depends(get_ai_provider),
):
    resume_text = await _read_resume(resume)
    return await provider.analyze_resume(resume_text)


@router.post("/api/analyze-resume-for-suggestions", response_model=ResumeSuggestions)
@limiter.limit(settings.rate_limit)
async def analyze_resume_for_suggestions(
    request: Request,
    resume: UploadFile = File(...),
    provider: AIProvider = Depends(get_ai_provider),
):
    resume_text = await _read_resume(resume)
    await provider.ensure_resume(resume_text)
    return await provider.analyze_suggestions(resume_text)


@router.post("/api/extract-resume-text", response_model=ExtractTextResponse)
async def extract_resume_text(resume: UploadFile = File(...)):
    return ExtractTextResponse(text=await _read_resume(resume))


# --- Cover letters ---


@router.post("/api/generate-cover-letter", response_model=CoverLetterResponse)
@limiter.limit(settings.rate_limit)
async def generate_cover_letter(
    request: Request,
    resume: UploadFile = File(...),
    position: str = Form(...),
    company_name: str | None = Form(None, alias="companyName"),
    job_description: str | None = Form(None, alias="jobDescription"),
    hiring_manager: str | None = Form(None, alias="hiringManager"),
    tone: str | None = Form(None),
    provider: AIProvider = Depends(get_ai_provider),
):
    if not position.strip():
        raise ValidationError("Resume and position are required")
    resume_text = await _read_resume(resume)
    return await provider.generate_cover_letter(
        CoverLetterRequest(
            resume_text=resume_text,
            position=position.strip(),
            company_name=company_name,
            job_description=job_description,
            hiring_manager=hiring_manager,
            tone=tone,
        )
    )


@router.post("/api/download-cover-letter")
async def download_cover_letter(letter: CoverLetterResponse):
    try:
        content = cover_letter_document.render_cover_letter(letter)
    except Exception as e:
        logger.error("Cover letter rendering failed: %s", e)
        raise AssistantError("Failed to generate document", detail=str(e)) from e

    filename = cover_letter_document.cover_letter_filename(letter)
    return Response(
        content=content,
        media_type=cover_letter_document.DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# --- Interview prep ---


@router.post("/api/analyze-interview-types", response_model=InterviewTypeAnalysis)
@limiter.limit(settings.rate_limit)
async def analyze_interview_types(
    request: Request,
    body: AnalyzeInterviewTypesRequest,
    provider: AIProvider = Depends(get_ai_provider),
):
    return await provider.analyze_interview_types(body.resume_text, body.job_description)


@router.post("/api/generate-interview-questions", response_model=InterviewQuestionsResponse)
@limiter.limit(settings.rate_limit)
async def generate_interview_questions(
    request: Request,
    body: InterviewQuestionsRequest,
    provider: AIProvider = Depends(get_ai_provider),
):
    return await provider.generate_interview_questions(body)


@router.post("/api/evaluate-answer", response_model=EvaluateAnswerResponse)
@limiter.limit(settings.rate_limit)
async def evaluate_answer(
    request: Request,
    body: EvaluateAnswerRequest,
    provider: AIProvider = Depends(get_ai_provider),
):
    return await provider.evaluate_answer(body)


@router.post("/api/text-to-speech", response_model=TextToSpeechResponse)
@limiter.limit(settings.rate_limit)
async def text_to_speech(
    request: Request,
    body: TextToSpeechRequest,
    speech: ElevenLabsClient = Depends(get_speech_client),
):
    return await speech.synthesize(body.text)


# --- ATS ---


@router.post("/api/ats-check", response_model=ATSCheckResponse)
@limiter.limit(settings.rate_limit)
async def ats_check(
    request: Request,
    resume: UploadFile = File(...),
    job_description: str | None = Form(None, alias="jobDescription"),
    provider: AIProvider = Depends(get_ai_provider),
):
    resume_text = await _read_resume(resume)
    return await provider.check_ats_compatibility(resume_text, job_description)
