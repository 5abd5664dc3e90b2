import json

import pytest

from config import Settings
from conftest import SAMPLE_JD, SAMPLE_RESUME
from services.errors import SessionStateError, ValidationError
from services.interview_session import (
    SKIPPED_FEEDBACK,
    InterviewStep,
    InterviewWizard,
    QuestionPhase,
    SpeechCapture,
    caption_delay_per_char,
    caption_frames,
)

TYPES = json.dumps({
    "availableTypes": [{"type": "Technical"}, {"type": "Behavioral"}],
    "recommendedType": "Behavioral",
})
QUESTIONS = json.dumps({
    "questions": [
        {"question": "Describe a hard bug you fixed.", "category": "Technical"},
        {"question": "Tell me about a conflict at work.", "category": "Behavioral"},
    ]
})


async def _started_wizard(scripted_provider, *extra):
    provider = scripted_provider(TYPES, "MATCH", QUESTIONS, *extra)
    wizard = InterviewWizard.from_settings(Settings(_env_file=None))
    wizard.load_resume(SAMPLE_RESUME)
    await wizard.analyze_types(provider, SAMPLE_JD)
    await wizard.start(provider)
    return wizard, provider


class TestWizardFlow:
    @pytest.mark.asyncio
    async def test_setup_steps(self, scripted_provider):
        provider = scripted_provider(TYPES, "MATCH", QUESTIONS)
        wizard = InterviewWizard()
        assert wizard.step is InterviewStep.UPLOAD_RESUME

        wizard.load_resume(SAMPLE_RESUME)
        analysis = await wizard.analyze_types(provider, SAMPLE_JD)
        assert wizard.step is InterviewStep.SELECT_INTERVIEW_TYPE
        assert wizard.selected_type == analysis.recommended_type == "Behavioral"

        wizard.select_type("Technical")
        session = await wizard.start(provider)
        assert wizard.step is InterviewStep.IN_SESSION
        assert wizard.phase is QuestionPhase.ASKING
        assert len(session.questions) == 2
        assert "Technical" in provider.prompts[-1].user

    @pytest.mark.asyncio
    async def test_start_before_types_rejected(self, scripted_provider):
        wizard = InterviewWizard()
        wizard.load_resume(SAMPLE_RESUME)
        with pytest.raises(SessionStateError):
            await wizard.start(scripted_provider())

    def test_blank_resume_rejected(self):
        with pytest.raises(ValidationError):
            InterviewWizard().load_resume("   ")

    @pytest.mark.asyncio
    async def test_skip_appends_and_advances(self, scripted_provider):
        wizard, provider = await _started_wizard(scripted_provider)
        calls = provider.calls

        wizard.skip()

        session = wizard.session
        assert session.user_answers == [""]
        assert session.feedback == [SKIPPED_FEEDBACK]
        assert session.current_question_index == 1
        assert wizard.phase is QuestionPhase.ASKING
        assert provider.calls == calls

    @pytest.mark.asyncio
    async def test_submit_then_advance_to_complete(self, scripted_provider):
        wizard, provider = await _started_wizard(
            scripted_provider, '{"feedback": "Clear and specific."}'
        )
        wizard.begin_speaking()
        assert wizard.phase is QuestionPhase.SPEAKING
        wizard.finish_speaking()
        assert wizard.phase is QuestionPhase.LISTENING

        feedback = await wizard.submit_answer(provider, "I traced a race condition.")
        assert feedback == "Clear and specific."
        assert wizard.phase is QuestionPhase.FEEDBACK
        with pytest.raises(SessionStateError):
            await wizard.submit_answer(provider, "again")

        wizard.advance()
        wizard.skip()
        assert wizard.step is InterviewStep.COMPLETE
        assert wizard.session.user_answers == ["I traced a race condition.", ""]
        assert wizard.session.feedback == ["Clear and specific.", "Skipped"]

    @pytest.mark.asyncio
    async def test_submit_uses_transcript(self, scripted_provider):
        wizard, provider = await _started_wizard(scripted_provider, '{"feedback": "Ok."}')
        wizard.toggle_listening()
        wizard.capture.on_result(final=["I led", "the migration"], interim="")
        await wizard.submit_answer(provider)
        assert wizard.session.user_answers == ["I led the migration "]
        assert wizard.capture.transcript == ""

    @pytest.mark.asyncio
    async def test_blank_answer_rejected_without_model_call(self, scripted_provider):
        wizard, provider = await _started_wizard(scripted_provider)
        calls = provider.calls
        with pytest.raises(ValidationError):
            await wizard.submit_answer(provider, "   ")
        assert provider.calls == calls

    @pytest.mark.asyncio
    async def test_advance_requires_answer(self, scripted_provider):
        wizard, _ = await _started_wizard(scripted_provider)
        with pytest.raises(SessionStateError):
            wizard.advance()

    @pytest.mark.asyncio
    async def test_restart_clears_everything(self, scripted_provider):
        wizard, _ = await _started_wizard(scripted_provider)
        wizard.skip()
        wizard.restart()
        assert wizard.step is InterviewStep.UPLOAD_RESUME
        assert wizard.session is None
        assert wizard.resume_text == ""
        assert wizard.selected_type == ""

    @pytest.mark.asyncio
    async def test_cannot_listen_while_speaking(self, scripted_provider):
        wizard, _ = await _started_wizard(scripted_provider)
        wizard.toggle_listening()
        wizard.begin_speaking()
        assert not wizard.capture.listening
        with pytest.raises(SessionStateError):
            wizard.toggle_listening()


class TestSpeechCapture:
    def test_restarts_on_end_while_listening(self):
        capture = SpeechCapture()
        capture.start()
        assert capture.on_end() is True
        capture.stop()
        assert capture.on_end() is False

    def test_no_speech_is_not_fatal(self):
        capture = SpeechCapture()
        capture.start()
        capture.on_error("no-speech")
        assert capture.listening
        capture.on_error("not-allowed")
        assert not capture.listening

    def test_interim_shown_on_top_of_final(self):
        capture = SpeechCapture()
        capture.on_result(final=["Hello"], interim="wor")
        assert capture.transcript == "Hello wor"
        capture.on_result(final=["world"], interim="")
        assert capture.transcript == "Hello world "


class TestCaptions:
    def test_delay_from_audio_duration(self):
        assert caption_delay_per_char("a" * 10, 10000) == 600

    def test_delay_floor(self):
        assert caption_delay_per_char("a" * 10, 2000) == 100

    def test_delay_empty_text(self):
        assert caption_delay_per_char("", 5000) == 0

    def test_frames_are_prefixes(self):
        assert list(caption_frames("Hi!")) == ["", "H", "Hi", "Hi!"]

    def test_wizard_uses_configured_pacing(self):
        settings = Settings(_env_file=None, caption_lead_ms=2000, caption_floor_ms=500)
        wizard = InterviewWizard.from_settings(settings)
        assert wizard.caption_lead_ms == 2000
        assert wizard.caption_floor_ms == 500
        assert wizard.caption_delay("a" * 10, 10000) == 800
        assert wizard.caption_delay("a" * 10, 2000) == 50


def test_session_step_without_session_is_state_error():
    wizard = InterviewWizard()
    wizard.step = InterviewStep.IN_SESSION
    with pytest.raises(SessionStateError):
        wizard.skip()
