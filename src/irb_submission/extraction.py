from __future__ import annotations

import logging
import zipfile
from io import BytesIO

import fitz
from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from .errors import DocumentExtractionError

logger = logging.getLogger(__name__)


def extract_text_from_docx(data: bytes) -> str:
    """Return the paragraph text of a .docx payload, one paragraph per line."""
    try:
        document = DocxDocument(BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise DocumentExtractionError("Unable to read Word document.") from exc
    paragraphs = [paragraph.text for paragraph in document.paragraphs]
    text = "\n".join(p for p in paragraphs if p.strip())
    logger.debug("Extracted %d characters from Word document", len(text))
    return text


def extract_text_from_pdf(data: bytes) -> str:
    """Return the text of every page in a PDF payload, space-separated."""
    pdf = open_pdf(data)
    try:
        texts = [page.get_text().strip() for page in pdf]
    finally:
        pdf.close()
    return " ".join(text for text in texts if text)


def open_pdf(data: bytes) -> fitz.Document:
    """Open a PDF payload, raising DocumentExtractionError for unreadable data."""
    try:
        pdf = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise DocumentExtractionError("Unable to read PDF document.") from exc
    if pdf.needs_pass:
        pdf.close()
        raise DocumentExtractionError("PDF document is password protected.")
    if pdf.page_count == 0:
        pdf.close()
        raise DocumentExtractionError("PDF document has no pages.")
    return pdf
