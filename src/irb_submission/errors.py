from __future__ import annotations


class InsufficientTextError(ValueError):
    """Raised when text has no sentences or no words to score."""


class DocumentExtractionError(RuntimeError):
    """Raised when text cannot be pulled out of an uploaded document."""


class SubmissionError(ValueError):
    """Raised when a submission form fails validation."""
