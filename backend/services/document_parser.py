import io
import re

import pdfplumber
from docx import Document

SUPPORTED_EXTENSIONS = (".pdf", ".docx")

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_CHARS_RE = re.compile(r"[^\w\s.,!?-]")


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_document_text(filename: str, content: bytes) -> str:
    """Dispatch on file extension. Raises ValueError for unsupported types."""
    lowered = filename.lower()
    if lowered.endswith(".pdf"):
        return extract_text(content)
    if lowered.endswith(".docx"):
        return extract_text_docx(content)
    raise ValueError(f"Unsupported file type: {filename}")


def clean_text(text: str) -> str:
    """Collapse whitespace and drop symbols before embedding."""
    collapsed = _WHITESPACE_RE.sub(" ", text)
    return _DISALLOWED_CHARS_RE.sub("", collapsed).strip()
