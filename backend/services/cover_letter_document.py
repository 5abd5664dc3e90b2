"""Render a generated cover letter as a DOCX document."""

import io
import re

from docx import Document
from docx.document import Document as DocxDocument
from docx.shared import Inches, Pt

from models.responses import CoverLetterResponse

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
FONT = "Arial"


def split_paragraphs(body: str) -> list[str]:
    """One entry per blank-line separated segment of the letter body."""
    return [segment.strip() for segment in body.replace("\r\n", "\n").split("\n\n")]


def _add_line(
    doc: DocxDocument, text: str, size: int, bold: bool = False, space_after: int | None = None
):
    paragraph = doc.add_paragraph()
    run = paragraph.add_run(text)
    run.bold = bold
    run.font.size = Pt(size)
    run.font.name = FONT
    if space_after is not None:
        paragraph.paragraph_format.space_after = Pt(space_after)
    return paragraph


def build_cover_letter(letter: CoverLetterResponse) -> DocxDocument:
    contact = letter.contact_info
    doc = Document()
    for section in doc.sections:
        section.top_margin = section.bottom_margin = Inches(1)
        section.left_margin = section.right_margin = Inches(1)

    # Contact header
    _add_line(doc, contact.name.upper(), size=14, bold=True)
    _add_line(doc, contact.location, size=11)
    _add_line(doc, " | ".join(part for part in (contact.email, contact.phone) if part), size=11)
    if contact.linkedin:
        _add_line(doc, f"LinkedIn: {contact.linkedin}", size=11)
    doc.add_paragraph()

    _add_line(doc, letter.date, size=12)
    doc.add_paragraph()

    # Recipient
    _add_line(doc, letter.hiring_manager or "Hiring Manager", size=12)
    _add_line(doc, letter.company_name or "Hiring Company", size=12)
    doc.add_paragraph()

    # Body already includes the salutation and sign-off
    for paragraph in split_paragraphs(letter.cover_letter):
        _add_line(doc, paragraph, size=12, space_after=12)

    return doc


def render_cover_letter(letter: CoverLetterResponse) -> bytes:
    buffer = io.BytesIO()
    build_cover_letter(letter).save(buffer)
    return buffer.getvalue()


def cover_letter_filename(letter: CoverLetterResponse) -> str:
    name = re.sub(r"\s+", "_", letter.contact_info.name.strip())
    name = re.sub(r"[^\w.-]", "", name)
    return f"{name}_Cover_Letter.docx" if name else "Cover_Letter.docx"
