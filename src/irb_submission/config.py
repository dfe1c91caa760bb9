from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class FeedbackSettings:
    """Configuration block for the live readability indicator."""

    highlight_grade_level: float = 12.0
    highlight_color: str = "red"
    default_color: str = "green"
    unavailable_color: str = "yellow"
    unavailable_label: str = "No score available"


@dataclass(slots=True)
class SubmissionConfig:
    """Configuration options for scoring and package assembly."""

    form_title: str = "IRB Submission Form"
    package_filename: str = "submission-package.pdf"
    original_prefix: str = "original-"
    drop_empty_tokens: bool = False
    include_word_text: bool = True
    include_pdf_text: bool = False
    readability_page: bool = True
    font_size: float = 12.0
    title_font_size: float = 16.0
    page_width: float = 595.0
    page_height: float = 842.0
    feedback: FeedbackSettings = field(default_factory=FeedbackSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _known_fields(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the keys that name a field of the dataclass cls."""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


def config_from_dict(data: Mapping[str, Any] | None) -> SubmissionConfig:
    """Build a SubmissionConfig from a dictionary-like input; unknown keys are ignored."""
    if not data:
        return SubmissionConfig()
    kwargs = _known_fields(SubmissionConfig, data)
    feedback = kwargs.pop("feedback", None)
    if isinstance(feedback, Mapping):
        kwargs["feedback"] = FeedbackSettings(**_known_fields(FeedbackSettings, feedback))
    elif isinstance(feedback, FeedbackSettings):
        kwargs["feedback"] = feedback
    return SubmissionConfig(**kwargs)


def config_from_yaml(path: str | Path) -> SubmissionConfig:
    """Read a YAML mapping of overrides from path."""
    with Path(path).open(encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)
    if parsed is None:
        return SubmissionConfig()
    if not isinstance(parsed, MutableMapping):
        raise ValueError(f"{path}: configuration must be a YAML mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> SubmissionConfig:
    """Defaults when no path is given, otherwise the YAML overrides at path."""
    return SubmissionConfig() if path is None else config_from_yaml(path)
