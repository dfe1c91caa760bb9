from __future__ import annotations

import math

from .errors import InsufficientTextError
from .models import ReadabilityResult, ReadabilityStats
from .syllables import count_syllables
from .tokenization import split_sentences, split_words

KINDERGARTEN = "Kindergarten"
COLLEGE = "College"
POST_GRADUATE = "Post-graduate"
NO_SCORE_LABEL = "No score available"


def compute_readability_stats(
    text: str, drop_empty_tokens: bool = False
) -> ReadabilityStats:
    """
    Count words, sentences and syllables and apply the Flesch-Kincaid
    grade-level formula.

    Raises InsufficientTextError when the text has no sentences or no words.
    """
    sentences = split_sentences(text)
    words = split_words(text, drop_empty=drop_empty_tokens)
    if not sentences:
        raise InsufficientTextError("Text contains no sentences to score.")
    if not words:
        raise InsufficientTextError("Text contains no words to score.")

    syllables = sum(count_syllables(word) for word in words)
    word_count = len(words)
    sentence_count = len(sentences)
    grade_level = (
        0.39 * (word_count / sentence_count)
        + 11.8 * (syllables / word_count)
        - 15.59
    )
    return ReadabilityStats(
        word_count=word_count,
        sentence_count=sentence_count,
        syllable_count=syllables,
        grade_level=grade_level,
    )


def flesch_kincaid_grade(text: str, drop_empty_tokens: bool = False) -> float:
    """Return the raw Flesch-Kincaid grade level for text."""
    return compute_readability_stats(text, drop_empty_tokens).grade_level


def grade_band(grade_level: float) -> str:
    """Map a grade level to a human-readable band such as "7-8 grade"."""
    if grade_level < 1:
        return KINDERGARTEN
    if grade_level > 16:
        return POST_GRADUATE
    if grade_level > 12:
        return COLLEGE
    # Integer grades give a degenerate range like "7-7 grade".
    return f"{math.floor(grade_level)}-{math.ceil(grade_level)} grade"


def score_text(
    text: str,
    drop_empty_tokens: bool = False,
    unavailable_label: str = NO_SCORE_LABEL,
) -> ReadabilityResult:
    """Score text without raising; insufficient text yields an unavailable result."""
    try:
        stats = compute_readability_stats(text, drop_empty_tokens)
    except InsufficientTextError:
        return ReadabilityResult(grade_level=None, label=unavailable_label)
    return ReadabilityResult(
        grade_level=stats.grade_level,
        label=grade_band(stats.grade_level),
        stats=stats,
    )
