import io
import logging
from pathlib import PurePath
from urllib.parse import unquote

import pdfplumber
from docx import Document

from services.errors import ValidationError

logger = logging.getLogger(__name__)

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT = "text/plain"

_EXTENSION_TYPES = {".pdf": PDF, ".docx": DOCX, ".txt": TXT}

MIN_RESUME_CHARS = 100


def _decode_run(run: str) -> str:
    """URL-decode one text run, keeping the raw run if it isn't valid UTF-8."""
    try:
        return unquote(run, errors="strict")
    except UnicodeDecodeError:
        return run


def extract_text_pdf(pdf_bytes: bytes) -> str:
    """Concatenate the text runs of every page, one line per page."""
    text = ""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            for word in page.extract_words():
                if word.get("text"):
                    text += _decode_run(word["text"]) + " "
            text += "\n"
    return text


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract paragraph and table text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells if cell.text)
    return "\n".join(lines).strip()


def resolve_media_type(content_type: str | None, filename: str | None = None) -> str:
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type and media_type != "application/octet-stream":
        return media_type
    if filename:
        return _EXTENSION_TYPES.get(PurePath(filename).suffix.lower(), media_type)
    return media_type


def extract_text(content: bytes, content_type: str | None, filename: str | None = None) -> str:
    """Extract text from an uploaded document based on its declared type."""
    media_type = resolve_media_type(content_type, filename)
    if media_type == PDF:
        return extract_text_pdf(content)
    if media_type == DOCX:
        return extract_text_docx(content)
    if media_type == TXT:
        return content.decode("utf-8")
    # Unknown types: best effort
    logger.debug("Decoding %s upload as UTF-8 text", media_type or "untyped")
    return content.decode("utf-8", errors="replace")


def ensure_resume_text(text: str | None, min_chars: int = MIN_RESUME_CHARS) -> str:
    """Reject extracted text that is missing or too short to be a resume."""
    if not text or len(text.strip()) < min_chars:
        raise ValidationError(
            "Could not extract text from resume",
            detail=f"extracted {len((text or '').strip())} chars, need {min_chars}",
        )
    return text
