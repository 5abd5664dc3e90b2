from typing import Any

from pydantic import Field, field_validator

from models.responses import CamelModel


def _none_if_blank(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AnalyzeInterviewTypesRequest(CamelModel):
    resume_text: str = Field(..., min_length=1, max_length=50000)
    job_description: str | None = Field(None, max_length=10000)

    @field_validator("job_description", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return _none_if_blank(value)


class InterviewQuestionsRequest(CamelModel):
    resume_text: str = Field(..., min_length=1, max_length=50000)
    job_description: str | None = Field(None, max_length=10000)
    interview_type: str | None = Field(None, max_length=200)

    @field_validator("job_description", "interview_type", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return _none_if_blank(value)


class EvaluateAnswerRequest(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1, max_length=20000)
    resume_text: str = Field(..., min_length=1, max_length=50000)


class CoverLetterRequest(CamelModel):
    resume_text: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    company_name: str | None = None
    job_description: str | None = None
    hiring_manager: str | None = None
    tone: str | None = None

    @field_validator("company_name", "job_description", "hiring_manager", "tone", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return _none_if_blank(value)


class TextToSpeechRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=5000)
