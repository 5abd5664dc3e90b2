import io

import pytest
from docx import Document

from services import text_extractor
from services.errors import ValidationError
from services.text_extractor import (
    DOCX,
    PDF,
    TXT,
    ensure_resume_text,
    extract_text,
    resolve_media_type,
)


class _FakePage:
    def __init__(self, words):
        self._words = words

    def extract_words(self):
        return [{"text": w} for w in self._words]


class _FakePdf:
    def __init__(self, pages):
        self.pages = [_FakePage(words) for words in pages]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_pdf(monkeypatch):
    def install(*pages):
        monkeypatch.setattr(text_extractor.pdfplumber, "open", lambda stream: _FakePdf(pages))

    return install


def test_pdf_runs_joined_per_page(fake_pdf):
    fake_pdf(["Jane", "Smith"], ["Python"])
    assert extract_text(b"%PDF", PDF) == "Jane Smith \nPython \n"


def test_pdf_runs_url_decoded(fake_pdf):
    fake_pdf(["C%23", "R%26D", "100%"])
    # "100%" is not a valid escape and is kept raw
    assert extract_text(b"%PDF", PDF) == "C# R&D 100% \n"


def test_pdf_invalid_utf8_escape_kept_raw(fake_pdf):
    fake_pdf(["%FF%FE"])
    assert extract_text(b"%PDF", PDF) == "%FF%FE \n"


def test_docx_paragraphs_and_tables():
    doc = Document()
    doc.add_paragraph("Jane Smith")
    doc.add_paragraph("Backend engineer")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Python"
    table.cell(0, 1).text = "Docker"
    buffer = io.BytesIO()
    doc.save(buffer)

    text = extract_text(buffer.getvalue(), DOCX)
    assert text.splitlines() == ["Jane Smith", "Backend engineer", "Python", "Docker"]


def test_txt_decoded():
    assert extract_text("Résumé".encode("utf-8"), "text/plain; charset=utf-8") == "Résumé"


def test_txt_invalid_utf8_raises():
    with pytest.raises(UnicodeDecodeError):
        extract_text(b"\xff\xfe bad", TXT)


def test_unknown_type_best_effort():
    assert extract_text(b"plain \xff text", "application/rtf") == "plain � text"


@pytest.mark.parametrize("content_type,filename,expected", [
    ("application/pdf", None, PDF),
    ("application/octet-stream", "cv.docx", DOCX),
    (None, "CV.PDF", PDF),
    ("", "notes.txt", TXT),
    (None, None, ""),
])
def test_resolve_media_type(content_type, filename, expected):
    assert resolve_media_type(content_type, filename) == expected


class TestEnsureResumeText:
    def test_99_chars_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_resume_text("a" * 99)
        assert exc_info.value.message == "Could not extract text from resume"

    def test_100_chars_accepted(self):
        assert ensure_resume_text("a" * 100) == "a" * 100

    def test_whitespace_not_counted(self):
        with pytest.raises(ValidationError):
            ensure_resume_text("  " + "a" * 99 + "\n\n")

    def test_none_rejected(self):
        with pytest.raises(ValidationError):
            ensure_resume_text(None)

    def test_custom_minimum(self):
        assert ensure_resume_text("short", min_chars=5) == "short"
