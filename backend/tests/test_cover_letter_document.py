import io

from docx import Document
from docx.shared import Pt

from models.responses import ContactInfo, CoverLetterResponse
from services.cover_letter_document import (
    build_cover_letter,
    cover_letter_filename,
    render_cover_letter,
    split_paragraphs,
)

BODY = (
    "Dear Ms. Lee,\r\n\r\n"
    "I am writing to apply for the Backend Engineer role.\n\n"
    "At DataCorp I built APIs serving 2M requests a day.\n\n"
    "Sincerely,\nJane Smith"
)


def _letter(**overrides) -> CoverLetterResponse:
    fields = {
        "cover_letter": BODY,
        "contact_info": ContactInfo(
            name="Jane Smith",
            email="jane@example.com",
            phone="555-123-4567",
            linkedin="linkedin.com/in/janesmith",
            location="Austin, TX",
        ),
        "date": "October 19, 2026",
        "company_name": "Acme",
        "position": "Backend Engineer",
        "hiring_manager": "Ms. Lee",
    }
    fields.update(overrides)
    return CoverLetterResponse(**fields)


def test_split_paragraphs():
    assert split_paragraphs(BODY) == [
        "Dear Ms. Lee,",
        "I am writing to apply for the Backend Engineer role.",
        "At DataCorp I built APIs serving 2M requests a day.",
        "Sincerely,\nJane Smith",
    ]


def test_header_and_recipient_block():
    texts = [p.text for p in build_cover_letter(_letter()).paragraphs]
    assert texts[:11] == [
        "JANE SMITH",
        "Austin, TX",
        "jane@example.com | 555-123-4567",
        "LinkedIn: linkedin.com/in/janesmith",
        "",
        "October 19, 2026",
        "",
        "Ms. Lee",
        "Acme",
        "",
        "Dear Ms. Lee,",
    ]


def test_name_is_bold_14pt():
    run = build_cover_letter(_letter()).paragraphs[0].runs[0]
    assert run.bold
    assert run.font.size == Pt(14)


def test_one_paragraph_per_body_segment():
    doc = build_cover_letter(_letter())
    body = [p.text for p in doc.paragraphs[10:]]
    assert body == split_paragraphs(BODY)


def test_defaults_without_linkedin_or_recipient():
    letter = _letter(
        contact_info=ContactInfo(name="Jane Smith", email="jane@example.com"),
        company_name="",
        hiring_manager=None,
    )
    texts = [p.text for p in build_cover_letter(letter).paragraphs]
    assert "LinkedIn" not in " ".join(texts)
    assert texts[2] == "jane@example.com"
    assert texts[6] == "Hiring Manager"
    assert texts[7] == "Hiring Company"


def test_render_round_trips_through_docx():
    doc = Document(io.BytesIO(render_cover_letter(_letter())))
    assert doc.paragraphs[0].text == "JANE SMITH"


def test_filename():
    assert cover_letter_filename(_letter()) == "Jane_Smith_Cover_Letter.docx"
    assert cover_letter_filename(_letter(contact_info=ContactInfo())) == "Cover_Letter.docx"
