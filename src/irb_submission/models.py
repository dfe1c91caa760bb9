from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ReadabilityStats:
    """Raw counts behind a Flesch-Kincaid grade level."""

    word_count: int
    sentence_count: int
    syllable_count: int
    grade_level: float


@dataclass(slots=True)
class ReadabilityResult:
    """Grade level plus band label; grade_level is None when no score exists."""

    grade_level: float | None
    label: str
    stats: ReadabilityStats | None = None

    @property
    def available(self) -> bool:
        return self.grade_level is not None


@dataclass(slots=True)
class SubmissionForm:
    """Applicant-entered form fields."""

    name: str = ""
    email: str = ""
    contact: str = ""
    query: str = ""
    consent_text: str = ""
    study_info_text: str = ""
    not_robot: bool = False


@dataclass(slots=True)
class Upload:
    """A file attached to the submission."""

    filename: str
    content_type: str
    data: bytes


@dataclass(slots=True)
class SubmissionPackage:
    """Result of assembling a submission into a single PDF."""

    pdf_bytes: bytes
    readability: ReadabilityResult
    combined_text: str
    originals: list[Upload] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
