"""Resume section segmentation and contact detection.

Cheap, deterministic signals fed to the ATS prompt as calibration context.
"""

import re
from dataclasses import dataclass, field

# Header patterns per canonical section name
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*history",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|history)?",
        r"academic\s*(?:background|qualifications)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:core\s+)?competencies",
        r"technologies",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career\s+)?objective",
        r"profile",
        r"about\s*me",
    ],
    "projects": [r"(?:key|selected|personal)?\s*projects"],
    "certifications": [
        r"certific(?:ations?|ates?)",
        r"licen[sc]es?\s*(?:&|and)?\s*certifications?",
    ],
    "achievements": [r"(?:key\s+)?achievements?", r"awards?(?:\s*(?:&|and)\s*honors?)?"],
}

_COMPILED: dict[str, re.Pattern] = {
    name: re.compile(rf"^\s*(?:{'|'.join(patterns)})\s*:?\s*$", re.IGNORECASE)
    for name, patterns in SECTION_PATTERNS.items()
}

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
PHONE_RE = re.compile(r"\+?\(?\d[\d\s\-().]{6,14}\d")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)

# Weighted importance for completeness scoring
SECTION_WEIGHTS: dict[str, float] = {
    "experience": 20,
    "skills": 15,
    "education": 12,
    "projects": 12,
    "summary": 10,
    "certifications": 8,
    "achievements": 5,
}
_TOTAL_WEIGHT = sum(SECTION_WEIGHTS.values())

# ATS parsers expect these headers
STANDARD_SECTIONS = ("experience", "education", "skills")


@dataclass
class ResumeProfile:
    sections: list[str] = field(default_factory=list)
    missing_standard_sections: list[str] = field(default_factory=list)
    completeness: float = 0.0
    contact: dict[str, str | None] = field(default_factory=dict)
    word_count: int = 0


def parse_sections(text: str) -> dict[str, str]:
    """Split resume text into named sections.

    Returns section name -> content. Text before the first recognised
    header goes into 'header'.
    """
    sections: dict[str, str] = {}
    current = "header"
    buffer: list[str] = []

    for line in text.split("\n"):
        stripped = line.strip()
        matched = None
        if stripped:
            matched = next(
                (name for name, pattern in _COMPILED.items() if pattern.match(stripped)),
                None,
            )
        if matched:
            if buffer:
                sections[current] = "\n".join(buffer).strip()
            current = matched
            buffer = []
        else:
            buffer.append(line)

    if buffer:
        sections[current] = "\n".join(buffer).strip()
    return sections


def extract_contact_info(text: str) -> dict[str, str | None]:
    email = EMAIL_RE.search(text)
    phone = PHONE_RE.search(text)
    linkedin = LINKEDIN_RE.search(text)
    github = GITHUB_RE.search(text)
    return {
        "email": email.group() if email else None,
        "phone": phone.group().strip() if phone else None,
        "linkedin": linkedin.group() if linkedin else None,
        "github": github.group() if github else None,
    }


def compute_section_completeness(sections: dict[str, str]) -> float:
    """Score 0.0-1.0 from the weights of the sections present."""
    found = sum(weight for name, weight in SECTION_WEIGHTS.items() if name in sections)
    return round(found / _TOTAL_WEIGHT, 3)


def build_profile(text: str) -> ResumeProfile:
    sections = parse_sections(text)
    found = sorted(name for name in sections if name != "header")
    return ResumeProfile(
        sections=found,
        missing_standard_sections=[s for s in STANDARD_SECTIONS if s not in sections],
        completeness=compute_section_completeness(sections),
        contact=extract_contact_info(text),
        word_count=len(text.split()),
    )
