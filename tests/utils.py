from __future__ import annotations

from io import BytesIO
from pathlib import Path

import fitz
from docx import Document as DocxDocument


def make_pdf_bytes(pages: list[str]) -> bytes:
    """Create a PDF with one page of text per entry."""
    pdf = fitz.open()
    for text in pages:
        page = pdf.new_page()
        page.insert_text((72, 72), text, fontsize=12)
    data = pdf.tobytes()
    pdf.close()
    return data


def make_encrypted_pdf_bytes(text: str, password: str = "secret") -> bytes:
    """Create a one-page PDF that needs a password to open."""
    pdf = fitz.open()
    pdf.new_page().insert_text((72, 72), text, fontsize=12)
    data = pdf.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw=password, user_pw=password
    )
    pdf.close()
    return data


def make_png_bytes(width: int = 20, height: int = 10) -> bytes:
    """Create a small white PNG image."""
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(255)
    return pix.tobytes("png")


def make_docx_bytes(paragraphs: list[str]) -> bytes:
    """Create a Word document containing the given paragraphs."""
    document = DocxDocument()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def write_bytes(path: Path, data: bytes) -> Path:
    path.write_bytes(data)
    return path


def page_texts(data: bytes) -> list[str]:
    """Return the text of each page of a PDF payload."""
    pdf = fitz.open(stream=data, filetype="pdf")
    texts = [page.get_text() for page in pdf]
    pdf.close()
    return texts
