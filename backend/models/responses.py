import math
import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def clamp_score(value: Any) -> int:
    """Coerce a model-supplied score to an int in [0, 100]."""
    if isinstance(value, str):
        match = re.search(r"-?\d+(?:\.\d+)?", value)
        value = float(match.group()) if match else 0
    if value is None or isinstance(value, bool):
        value = 0
    if not isinstance(value, (int, float)):
        raise ValueError(f"score must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError("score must be finite")
    return min(100, max(0, round(value)))


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


def _parse_years(value: Any) -> Any:
    if isinstance(value, str):
        match = re.search(r"\d+(?:\.\d+)?", value)
        return float(match.group()) if match else 0
    return 0 if value is None else value


Score = Annotated[int, BeforeValidator(clamp_score)]
Text = Annotated[str, BeforeValidator(_blank_if_none)]


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Resume analysis ---


class AnalysisItem(CamelModel):
    label: Text = ""
    present: bool = False
    message: Text = ""


class AnalysisSection(CamelModel):
    status: Literal["good", "warning", "poor"] = "poor"
    items: list[AnalysisItem] = []

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _status_from_items(self) -> "AnalysisSection":
        # good: >= 3/4 present, warning: >= 1/2, poor: fewer than half
        if self.items:
            ratio = sum(1 for item in self.items if item.present) / len(self.items)
            if ratio >= 0.75:
                self.status = "good"
            elif ratio >= 0.5:
                self.status = "warning"
            else:
                self.status = "poor"
        return self


class ResumeAnalysis(CamelModel):
    overall_score: Score
    ats_score: Score
    formatting_score: Score
    content_score: Score
    keyword_score: Score
    contact_info: AnalysisSection = AnalysisSection()
    structure: AnalysisSection = AnalysisSection()
    content: AnalysisSection = AnalysisSection()
    ats_compatibility: AnalysisSection = AnalysisSection()
    quick_wins: list[str] = []
    suggestions: list[str] = []


# --- Suggestions & cover letters ---


class ContactInfo(CamelModel):
    name: Text = ""
    email: Text = ""
    phone: Text = ""
    linkedin: Text = ""
    location: Text = ""


class ResumeSuggestions(CamelModel):
    suggested_positions: list[str] = []
    candidate_level: Text = ""
    primary_skills: list[str] = []
    years_of_experience: Annotated[float, BeforeValidator(_parse_years)] = 0
    contact_info: ContactInfo = ContactInfo()


class CoverLetterResponse(CamelModel):
    cover_letter: str = Field(..., min_length=1)
    contact_info: ContactInfo = ContactInfo()
    date: Text = ""
    company_name: Text = ""
    position: Text = ""
    hiring_manager: str | None = None


# --- Interview prep ---


class InterviewType(CamelModel):
    type: str
    description: Text = ""
    relevance: Text = ""
    skills_to_test: list[str] = []


class InterviewTypeAnalysis(CamelModel):
    available_types: list[InterviewType] = []
    recommended_type: Text = ""
    candidate_level: Text = ""
    primary_skills: list[str] = []

    @model_validator(mode="after")
    def _default_recommendation(self) -> "InterviewTypeAnalysis":
        if not self.recommended_type and self.available_types:
            self.recommended_type = self.available_types[0].type
        return self


class InterviewQuestion(CamelModel):
    question: str = Field(..., min_length=1)
    category: Text = ""
    difficulty: Text = ""


class InterviewQuestionsResponse(CamelModel):
    questions: list[InterviewQuestion] = Field(..., min_length=1)


class EvaluateAnswerResponse(CamelModel):
    feedback: str = Field(..., min_length=1)


# --- ATS check ---


class ATSIssue(CamelModel):
    issue: Text = ""
    fix: Text = ""


class KeywordAnalysis(CamelModel):
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    match_rate: Score = 0

    @model_validator(mode="after")
    def _disjoint_and_rated(self) -> "KeywordAnalysis":
        seen: set[str] = set()
        matched = []
        for kw in self.matched_keywords:
            key = kw.strip().lower()
            if key and key not in seen:
                seen.add(key)
                matched.append(kw.strip())
        missing = []
        for kw in self.missing_keywords:
            key = kw.strip().lower()
            if key and key not in seen:
                seen.add(key)
                missing.append(kw.strip())
        self.matched_keywords = matched
        self.missing_keywords = missing
        total = len(matched) + len(missing)
        if total:
            self.match_rate = round(len(matched) / total * 100)
        return self


class ATSCheckResponse(CamelModel):
    score: Score
    critical_issues: list[ATSIssue] = []
    warnings: list[ATSIssue] = []
    passed: list[str] = []
    keyword_analysis: KeywordAnalysis | None = None


# --- Misc ---


class ExtractTextResponse(BaseModel):
    text: str


class TextToSpeechResponse(CamelModel):
    audio: str
    content_type: str = "audio/mpeg"


class HealthResponse(CamelModel):
    status: str = "ok"
    provider: str | None = None
    tts_configured: bool = False
