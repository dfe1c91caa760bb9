from __future__ import annotations

import logging
import mimetypes
from typing import List, Sequence

import fitz

from .config import SubmissionConfig
from .errors import DocumentExtractionError, SubmissionError
from .extraction import extract_text_from_docx, extract_text_from_pdf, open_pdf
from .models import SubmissionForm, SubmissionPackage, Upload
from .scoring import score_text
from .tokenization import combine_texts

logger = logging.getLogger(__name__)

FONT_NAME = "helv"
MARGIN = 50.0
LINE_SPACING = 20.0

# Upload kinds returned by classify_upload.
KIND_PNG = "png"
KIND_JPEG = "jpeg"
KIND_UNSUPPORTED_IMAGE = "unsupported-image"
KIND_PDF = "pdf"
KIND_WORD = "word"
KIND_UNKNOWN = "unknown"


def guess_content_type(filename: str) -> str:
    """Guess a MIME type from a file name, falling back to octet-stream."""
    content_type, _ = mimetypes.guess_type(filename)
    if content_type is None and filename.lower().endswith(".docx"):
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    return content_type or "application/octet-stream"


def classify_upload(upload: Upload) -> str:
    """Decide how an upload is embedded based on its content type and name."""
    content_type = upload.content_type.lower()
    name = upload.filename.lower()
    if "image" in content_type:
        if "png" in content_type:
            return KIND_PNG
        if "jpeg" in content_type or "jpg" in content_type:
            return KIND_JPEG
        return KIND_UNSUPPORTED_IMAGE
    if "pdf" in content_type:
        return KIND_PDF
    if "word" in content_type or name.endswith(".doc") or name.endswith(".docx"):
        return KIND_WORD
    return KIND_UNKNOWN


def validate_submission(form: SubmissionForm, uploads: Sequence[Upload]) -> None:
    """Raise SubmissionError when the form is not ready to be packaged."""
    if not form.not_robot:
        raise SubmissionError("Please confirm you are not a robot.")
    if not uploads:
        raise SubmissionError("Please select at least one file to upload.")


def build_submission_package(
    form: SubmissionForm,
    uploads: Sequence[Upload],
    config: SubmissionConfig | None = None,
) -> SubmissionPackage:
    """Merge the form and its uploads into one PDF annotated with a reading level."""
    config = config or SubmissionConfig()
    validate_submission(form, uploads)

    pdf = fitz.open()
    try:
        _add_form_page(pdf, form, config)
        text_parts: List[str] = [form.consent_text, form.study_info_text]
        originals: List[Upload] = []
        skipped: List[str] = []

        for upload in uploads:
            kind = classify_upload(upload)
            logger.debug("Adding upload %s as %s", upload.filename, kind)
            try:
                if kind in (KIND_PNG, KIND_JPEG):
                    _add_image_page(pdf, upload, config)
                elif kind == KIND_PDF:
                    _add_pdf_pages(pdf, upload)
                    if config.include_pdf_text:
                        text_parts.append(extract_text_from_pdf(upload.data))
                elif kind == KIND_WORD:
                    _add_word_notice_page(pdf, upload, config)
                    if config.include_word_text:
                        text_parts.append(_word_text_or_empty(upload))
                    originals.append(
                        Upload(
                            filename=config.original_prefix + upload.filename,
                            content_type=upload.content_type,
                            data=upload.data,
                        )
                    )
                else:
                    logger.warning(
                        "Unsupported upload type %s for %s",
                        upload.content_type,
                        upload.filename,
                    )
                    skipped.append(upload.filename)
            except DocumentExtractionError as exc:
                logger.warning("Skipping %s: %s", upload.filename, exc)
                skipped.append(upload.filename)

        combined_text = combine_texts(*text_parts)
        readability = score_text(
            combined_text,
            drop_empty_tokens=config.drop_empty_tokens,
            unavailable_label=config.feedback.unavailable_label,
        )
        if config.readability_page:
            _add_readability_page(pdf, readability.label, readability.grade_level, config)

        pdf_bytes = pdf.tobytes()
        logger.info(
            "Assembled submission package: %d pages, reading level %s",
            pdf.page_count,
            readability.label,
        )
    finally:
        pdf.close()

    return SubmissionPackage(
        pdf_bytes=pdf_bytes,
        readability=readability,
        combined_text=combined_text,
        originals=originals,
        skipped=skipped,
    )


def _new_page(pdf: fitz.Document, config: SubmissionConfig) -> fitz.Page:
    return pdf.new_page(width=config.page_width, height=config.page_height)


def _add_form_page(
    pdf: fitz.Document, form: SubmissionForm, config: SubmissionConfig
) -> None:
    page = _new_page(pdf, config)
    y = MARGIN + config.title_font_size
    page.insert_text(
        (MARGIN, y), config.form_title, fontsize=config.title_font_size, fontname=FONT_NAME
    )
    y += LINE_SPACING * 1.5
    for label, value in (
        ("Name", form.name),
        ("Email", form.email),
        ("Contact", form.contact),
        ("Query", form.query),
    ):
        page.insert_text(
            (MARGIN, y), f"{label}: {value}", fontsize=config.font_size, fontname=FONT_NAME
        )
        y += LINE_SPACING

    width = config.page_width - 2 * MARGIN
    lines: List[str] = []
    for heading, body in (
        ("Informed consent", form.consent_text),
        ("Study information", form.study_info_text),
    ):
        lines.append(f"{heading}:")
        lines.extend(wrap_text(body, width, config.font_size))

    # Prose that runs past the bottom margin continues on new pages.
    bottom = config.page_height - MARGIN
    for line in lines:
        if y > bottom:
            page = _new_page(pdf, config)
            y = MARGIN + config.font_size
        if line:
            page.insert_text(
                (MARGIN, y), line, fontsize=config.font_size, fontname=FONT_NAME
            )
        y += config.font_size * 1.4


def wrap_text(text: str, width: float, fontsize: float) -> List[str]:
    """Break text into lines no wider than width in the form font."""
    lines: List[str] = []
    for paragraph in text.splitlines():
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and (
                fitz.get_text_length(candidate, fontname=FONT_NAME, fontsize=fontsize)
                > width
            ):
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


def _add_image_page(pdf: fitz.Document, upload: Upload, config: SubmissionConfig) -> None:
    page = _new_page(pdf, config)
    try:
        page.insert_image(page.rect, stream=upload.data, keep_proportion=True)
    except Exception as exc:  # MuPDF reports bad image data with several error types
        pdf.delete_page(page.number)
        raise DocumentExtractionError(f"Unable to embed image {upload.filename}") from exc


def _add_pdf_pages(pdf: fitz.Document, upload: Upload) -> None:
    source = open_pdf(upload.data)
    try:
        pdf.insert_pdf(source)
    finally:
        source.close()


def _add_word_notice_page(
    pdf: fitz.Document, upload: Upload, config: SubmissionConfig
) -> None:
    page = _new_page(pdf, config)
    page.insert_text(
        (MARGIN, 100),
        f"Word document attached: {upload.filename}",
        fontsize=config.font_size,
        fontname=FONT_NAME,
    )


def _word_text_or_empty(upload: Upload) -> str:
    try:
        return extract_text_from_docx(upload.data)
    except DocumentExtractionError as exc:
        logger.warning("Could not extract text from %s: %s", upload.filename, exc)
        return ""


def _add_readability_page(
    pdf: fitz.Document,
    label: str,
    grade_level: float | None,
    config: SubmissionConfig,
) -> None:
    page = _new_page(pdf, config)
    page.insert_text(
        (MARGIN, MARGIN),
        f"Document Reading Level: {label}",
        fontsize=config.font_size,
        fontname=FONT_NAME,
    )
    if grade_level is not None:
        page.insert_text(
            (MARGIN, MARGIN + LINE_SPACING),
            f"Flesch-Kincaid grade level: {grade_level:.2f}",
            fontsize=config.font_size,
            fontname=FONT_NAME,
        )
