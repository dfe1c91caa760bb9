"""
irb_submission package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .assembly import build_submission_package, validate_submission
from .config import SubmissionConfig, config_from_dict, config_from_yaml, load_config
from .feedback import ReadabilityFeedback
from .scoring import (
    compute_readability_stats,
    flesch_kincaid_grade,
    grade_band,
    score_text,
)
from .syllables import count_syllables

__all__ = [
    "SubmissionConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "count_syllables",
    "compute_readability_stats",
    "flesch_kincaid_grade",
    "grade_band",
    "score_text",
    "ReadabilityFeedback",
    "build_submission_package",
    "validate_submission",
]

__version__ = "0.1.0"
