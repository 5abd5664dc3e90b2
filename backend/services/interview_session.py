"""Voice interview practice session.

State machine for the interview wizard a client walks through:

    UPLOAD_RESUME -> SELECT_INTERVIEW_TYPE -> IN_SESSION -> COMPLETE

Inside IN_SESSION each question cycles through
ASKING -> SPEAKING -> LISTENING -> EVALUATING -> FEEDBACK, then the next
question or COMPLETE. Transitions only go forward; restart() is the only way
back and clears everything.

Speech capture and caption pacing are modelled here too so the client only
has to forward browser events.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from config import Settings
from models.requests import EvaluateAnswerRequest, InterviewQuestionsRequest
from models.responses import InterviewQuestion, InterviewTypeAnalysis
from services.errors import SessionStateError, ValidationError
from services.providers.base import AIProvider

logger = logging.getLogger(__name__)

SKIPPED_FEEDBACK = "Skipped"
DEFAULT_CAPTION_LEAD_MS = 4000
DEFAULT_CAPTION_FLOOR_MS = 1000


class InterviewStep(str, Enum):
    UPLOAD_RESUME = "upload_resume"
    SELECT_INTERVIEW_TYPE = "select_interview_type"
    IN_SESSION = "in_session"
    COMPLETE = "complete"


class QuestionPhase(str, Enum):
    ASKING = "asking"
    SPEAKING = "speaking"
    LISTENING = "listening"
    EVALUATING = "evaluating"
    FEEDBACK = "feedback"


@dataclass
class InterviewSession:
    questions: list[InterviewQuestion]
    current_question_index: int = 0
    user_answers: list[str] = field(default_factory=list)
    feedback: list[str] = field(default_factory=list)

    @property
    def current_question(self) -> InterviewQuestion | None:
        if self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    @property
    def answered_current(self) -> bool:
        return len(self.user_answers) > self.current_question_index


def caption_delay_per_char(
    text: str,
    audio_duration_ms: float,
    lead_ms: int = DEFAULT_CAPTION_LEAD_MS,
    floor_ms: int = DEFAULT_CAPTION_FLOOR_MS,
) -> float:
    """Milliseconds per character so the caption finishes ``lead_ms`` before the audio.

    Pacing comes from the audio duration only; nothing keeps the caption
    aligned with actual playback.
    """
    if not text:
        return 0.0
    return max(audio_duration_ms - lead_ms, floor_ms) / len(text)


def caption_frames(text: str) -> Iterator[str]:
    """Progressive prefixes of ``text``, from empty to complete."""
    for i in range(len(text) + 1):
        yield text[:i]


class SpeechCapture:
    """Continuous microphone capture driven by speech-recognition events."""

    NON_FATAL_ERRORS = frozenset({"no-speech"})

    def __init__(self) -> None:
        self.listening = False
        self._final = ""
        self._interim = ""

    @property
    def transcript(self) -> str:
        return self._final + self._interim

    def start(self) -> None:
        self.listening = True

    def stop(self) -> None:
        self.listening = False
        self._interim = ""

    def on_result(self, final: list[str] | None = None, interim: str = "") -> None:
        for chunk in final or []:
            self._final += chunk + " "
        self._interim = interim

    def on_end(self) -> bool:
        """End of stream. Returns True when capture should be restarted."""
        return self.listening

    def on_error(self, code: str) -> None:
        if code in self.NON_FATAL_ERRORS:
            return
        logger.debug("Speech capture stopped on error: %s", code)
        self.listening = False

    def clear(self) -> None:
        self._final = ""
        self._interim = ""


class InterviewWizard:
    def __init__(
        self,
        caption_lead_ms: int = DEFAULT_CAPTION_LEAD_MS,
        caption_floor_ms: int = DEFAULT_CAPTION_FLOOR_MS,
    ) -> None:
        self.caption_lead_ms = caption_lead_ms
        self.caption_floor_ms = caption_floor_ms
        self.capture = SpeechCapture()
        self._reset()

    @classmethod
    def from_settings(cls, settings: Settings) -> "InterviewWizard":
        return cls(
            caption_lead_ms=settings.caption_lead_ms,
            caption_floor_ms=settings.caption_floor_ms,
        )

    def _reset(self) -> None:
        self.step = InterviewStep.UPLOAD_RESUME
        self.resume_text = ""
        self.job_description: str | None = None
        self.interview_types: InterviewTypeAnalysis | None = None
        self.selected_type = ""
        self.session: InterviewSession | None = None
        self.phase: QuestionPhase | None = None
        self.speaking = False

    def _require(self, step: InterviewStep) -> None:
        if self.step is not step:
            raise SessionStateError(detail=f"expected {step.value}, at {self.step.value}")

    def _require_session(self) -> InterviewSession:
        self._require(InterviewStep.IN_SESSION)
        if self.session is None:
            raise SessionStateError(detail="no active session")
        return self.session

    # --- Setup ---

    def load_resume(self, resume_text: str) -> None:
        self._require(InterviewStep.UPLOAD_RESUME)
        if not resume_text.strip():
            raise ValidationError("Please upload your resume first")
        self.resume_text = resume_text

    async def analyze_types(self, provider: AIProvider, job_description: str | None = None) -> InterviewTypeAnalysis:
        self._require(InterviewStep.UPLOAD_RESUME)
        if not self.resume_text:
            raise ValidationError("Please upload your resume first")
        self.job_description = (job_description or "").strip() or None
        analysis = await provider.analyze_interview_types(self.resume_text, self.job_description)
        self.interview_types = analysis
        self.selected_type = analysis.recommended_type
        self.step = InterviewStep.SELECT_INTERVIEW_TYPE
        return analysis

    def select_type(self, interview_type: str) -> None:
        self._require(InterviewStep.SELECT_INTERVIEW_TYPE)
        self.selected_type = interview_type

    async def start(self, provider: AIProvider) -> InterviewSession:
        self._require(InterviewStep.SELECT_INTERVIEW_TYPE)
        if not self.selected_type:
            raise ValidationError("Please select an interview type")
        response = await provider.generate_interview_questions(
            InterviewQuestionsRequest(
                resume_text=self.resume_text,
                job_description=self.job_description,
                interview_type=self.selected_type,
            )
        )
        self.session = InterviewSession(questions=response.questions)
        self.step = InterviewStep.IN_SESSION
        self.phase = QuestionPhase.ASKING
        return self.session

    # --- Speech ---

    def begin_speaking(self) -> None:
        """The system starts speaking; never capture our own voice."""
        self.capture.stop()
        self.speaking = True
        if self.phase is QuestionPhase.ASKING:
            self.phase = QuestionPhase.SPEAKING

    def finish_speaking(self) -> None:
        self.speaking = False
        if self.phase is QuestionPhase.SPEAKING:
            self.phase = QuestionPhase.LISTENING

    def toggle_listening(self) -> bool:
        if self.speaking:
            raise SessionStateError("Please wait for the AI to finish speaking")
        if self.capture.listening:
            self.capture.stop()
        else:
            self.capture.start()
        return self.capture.listening

    def caption_delay(self, text: str, audio_duration_ms: float) -> float:
        return caption_delay_per_char(
            text, audio_duration_ms, self.caption_lead_ms, self.caption_floor_ms
        )

    # --- Answers ---

    async def submit_answer(self, provider: AIProvider, answer: str | None = None) -> str:
        """Evaluate the answer (or the captured transcript) and record the feedback."""
        session = self._require_session()
        if session.answered_current:
            raise SessionStateError(detail="question already answered")
        answer = self.capture.transcript if answer is None else answer
        if not answer.strip():
            raise ValidationError("Please provide an answer first")

        question = session.current_question
        previous_phase = self.phase
        self.phase = QuestionPhase.EVALUATING
        try:
            result = await provider.evaluate_answer(
                EvaluateAnswerRequest(
                    question=question.question, answer=answer, resume_text=self.resume_text
                )
            )
        except Exception:
            self.phase = previous_phase
            raise

        session.user_answers.append(answer)
        session.feedback.append(result.feedback)
        self.capture.clear()
        self.phase = QuestionPhase.FEEDBACK
        return result.feedback

    def skip(self) -> None:
        """Record an empty answer with 'Skipped' feedback and move on."""
        session = self._require_session()
        if session.answered_current:
            raise SessionStateError(detail="question already answered")
        session.user_answers.append("")
        session.feedback.append(SKIPPED_FEEDBACK)
        self.capture.clear()
        self.advance()

    def advance(self) -> None:
        session = self._require_session()
        if not session.answered_current:
            raise SessionStateError(detail="current question has no answer yet")
        session.current_question_index += 1
        if session.current_question_index >= len(session.questions):
            self.step = InterviewStep.COMPLETE
            self.phase = None
        else:
            self.phase = QuestionPhase.ASKING

    def restart(self) -> None:
        self.capture.stop()
        self.capture.clear()
        self._reset()
