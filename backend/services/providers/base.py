"""Abstract base class for the hosted-model providers.

Subclasses implement a single primitive:
    - complete(prompt): send one prompt to the hosted model, return its raw text

Everything else (prompting, the resume classifier, the content policy,
the relevance check, JSON extraction and normalisation) lives here, so both
providers honour the same contract.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import date

from models.requests import CoverLetterRequest, EvaluateAnswerRequest, InterviewQuestionsRequest
from models.responses import (
    ATSCheckResponse,
    CoverLetterResponse,
    EvaluateAnswerResponse,
    InterviewQuestionsResponse,
    InterviewTypeAnalysis,
    ResumeAnalysis,
    ResumeSuggestions,
)
from services import keyword_extractor, prompt_builder, section_parser
from services.content_policy import ContentPolicy, KeywordContentPolicy
from services.errors import NotAResumeError, ResumeMismatchError
from services.json_extraction import M, extract_model
from services.prompt_builder import Prompt

logger = logging.getLogger(__name__)

# Job descriptions at or below this length skip the relevance check
RELEVANCE_CHECK_MIN_CHARS = 50

_MISMATCH_PREFIX_RE = re.compile(r"^MISMATCH\s*[-–—:]?\s*", re.IGNORECASE)


def format_letter_date(day: date) -> str:
    """'October 19, 2026' style, no zero padding."""
    return f"{day:%B} {day.day}, {day.year}"


def is_affirmative(answer: str) -> bool:
    return answer.strip().strip(".!\"'").strip().upper() == "YES"


class AIProvider(ABC):
    name: str = ""

    def __init__(self, content_policy: ContentPolicy | None = None) -> None:
        self._content_policy = content_policy or KeywordContentPolicy()

    @abstractmethod
    async def complete(self, prompt: Prompt) -> str:
        """Send one prompt to the hosted model and return its raw text."""

    async def _generate(self, prompt: Prompt, schema: type[M]) -> M:
        raw = await self.complete(prompt)
        result = extract_model(raw, schema)
        if not result.ok:
            logger.warning(
                "%s returned unusable %s (%s): %r",
                self.name, schema.__name__, result.error.detail, raw[:300],
            )
        return result.unwrap()

    # --- Resume scoring ---

    async def ensure_resume(self, resume_text: str) -> None:
        """Raise NotAResumeError unless the classifier says the text is a resume."""
        answer = await self.complete(prompt_builder.build_resume_classifier_prompt(resume_text))
        if not is_affirmative(answer):
            logger.info("Resume classifier rejected document (answer=%r)", answer[:20])
            raise NotAResumeError()

    async def analyze_resume(self, resume_text: str) -> ResumeAnalysis:
        await self.ensure_resume(resume_text)
        return await self._generate(
            prompt_builder.build_resume_scoring_prompt(resume_text), ResumeAnalysis
        )

    async def analyze_suggestions(self, resume_text: str) -> ResumeSuggestions:
        return await self._generate(
            prompt_builder.build_suggestions_prompt(resume_text), ResumeSuggestions
        )

    # --- Cover letters ---

    async def generate_cover_letter(self, request: CoverLetterRequest) -> CoverLetterResponse:
        letter_date = format_letter_date(date.today())
        letter = await self._generate(
            prompt_builder.build_cover_letter_prompt(request, letter_date), CoverLetterResponse
        )
        # fill what the model left out from the request
        letter.date = letter.date or letter_date
        letter.position = letter.position or request.position
        letter.company_name = letter.company_name or request.company_name or "Hiring Company"
        letter.hiring_manager = (
            letter.hiring_manager
            or request.hiring_manager
            or prompt_builder.DEFAULT_HIRING_MANAGER
        )
        return letter

    # --- Interview prep ---

    async def analyze_interview_types(
        self, resume_text: str, job_description: str | None = None
    ) -> InterviewTypeAnalysis:
        return await self._generate(
            prompt_builder.build_interview_types_prompt(resume_text, job_description),
            InterviewTypeAnalysis,
        )

    async def _check_relevance(self, resume_text: str, job_description: str) -> None:
        verdict = (
            await self.complete(prompt_builder.build_relevance_prompt(resume_text, job_description))
        ).strip()
        if verdict.upper().startswith("MISMATCH"):
            reason = _MISMATCH_PREFIX_RE.sub("", verdict).strip()
            logger.info("Relevance check failed: %s", reason)
            raise ResumeMismatchError(reason)

    async def generate_interview_questions(
        self, request: InterviewQuestionsRequest
    ) -> InterviewQuestionsResponse:
        self._content_policy.enforce(request.job_description)

        job_description = (request.job_description or "").strip()
        if len(job_description) > RELEVANCE_CHECK_MIN_CHARS:
            await self._check_relevance(request.resume_text, job_description)

        return await self._generate(
            prompt_builder.build_interview_questions_prompt(request), InterviewQuestionsResponse
        )

    async def evaluate_answer(self, request: EvaluateAnswerRequest) -> EvaluateAnswerResponse:
        return await self._generate(
            prompt_builder.build_answer_feedback_prompt(request), EvaluateAnswerResponse
        )

    # --- ATS ---

    async def check_ats_compatibility(
        self, resume_text: str, job_description: str | None = None
    ) -> ATSCheckResponse:
        job_description = (job_description or "").strip() or None
        profile = section_parser.build_profile(resume_text)
        local_keywords = (
            keyword_extractor.build_keyword_analysis(resume_text, job_description)
            if job_description
            else None
        )

        result = await self._generate(
            prompt_builder.build_ats_prompt(resume_text, job_description, profile, local_keywords),
            ATSCheckResponse,
        )
        if job_description is None:
            result.keyword_analysis = None
        elif result.keyword_analysis is None or not (
            result.keyword_analysis.matched_keywords or result.keyword_analysis.missing_keywords
        ):
            result.keyword_analysis = local_keywords
        return result
