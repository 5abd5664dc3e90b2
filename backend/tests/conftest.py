"""Shared test configuration, fixtures and sample documents."""

import json

import pytest

from api.router import limiter
from services.prompt_builder import Prompt
from services.providers.base import AIProvider

# Rate limits would leak between tests sharing the TestClient address
limiter.enabled = False


SAMPLE_RESUME = """Jane Smith
jane.smith@email.com | (555) 123-4567 | Austin, TX
linkedin.com/in/janesmith | github.com/janesmith

Summary
Backend engineer with 6 years building Python services and data pipelines.

Experience
Senior Software Engineer | DataCorp | 2021 - Present
- Built REST APIs in FastAPI serving 2M requests/day
- Cut cloud spend 30% by moving batch jobs to Kubernetes

Software Engineer | WebWorks | 2018 - 2021
- Developed React dashboards and PostgreSQL reporting

Education
B.S. Computer Science | State University | 2018

Skills
Python, FastAPI, Docker, Kubernetes, PostgreSQL, React, AWS
"""

SAMPLE_JD = """Senior Python Engineer
We are hiring a backend engineer to build APIs with Python and FastAPI.
Requirements: Docker, Kubernetes, PostgreSQL, Terraform and AWS experience.
"""


def resume_analysis_json(score: int = 82) -> str:
    items = [
        {"label": "Email", "present": True, "message": "Found"},
        {"label": "Phone", "present": True, "message": "Found"},
        {"label": "LinkedIn", "present": True, "message": "Found"},
        {"label": "Location", "present": False, "message": "Add a city"},
    ]
    section = {"status": "good", "items": items}
    return json.dumps({
        "overallScore": score,
        "atsScore": 80,
        "formattingScore": 75,
        "contentScore": 85,
        "keywordScore": 70,
        "contactInfo": section,
        "structure": section,
        "content": section,
        "atsCompatibility": section,
        "quickWins": ["Add your city"],
        "suggestions": ["Quantify more achievements"],
    })


class ScriptedProvider(AIProvider):
    """Provider that replays canned model outputs and records every prompt."""

    name = "scripted"

    def __init__(self, responses, content_policy=None):
        super().__init__(content_policy)
        self._responses = list(responses)
        self.prompts: list[Prompt] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: Prompt) -> str:
        self.prompts.append(prompt)
        if not self._responses:
            raise AssertionError(f"unexpected model call: {prompt.system[:60]}")
        return self._responses.pop(0)


@pytest.fixture
def scripted_provider():
    def make(*responses, content_policy=None) -> ScriptedProvider:
        return ScriptedProvider(responses, content_policy=content_policy)

    return make


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls a hosted model (needs API keys)"
    )
