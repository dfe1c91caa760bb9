from __future__ import annotations

import re
from typing import List

SENTENCE_SPLIT_RE = re.compile(r"[.!?]")
WORD_SPLIT_RE = re.compile(r"[^a-zA-Z]+")


def split_sentences(text: str) -> List[str]:
    """Split on sentence-terminal punctuation, dropping whitespace-only segments."""
    return [segment for segment in SENTENCE_SPLIT_RE.split(text) if segment.strip()]


def split_words(text: str, drop_empty: bool = False) -> List[str]:
    """
    Split text on runs of non-letter characters.

    Leading or trailing punctuation leaves an empty token at that end, so
    "It ran." yields ["It", "ran", ""]. Those empty tokens are kept unless
    drop_empty is set.
    """
    tokens = WORD_SPLIT_RE.split(text)
    if drop_empty:
        return [token for token in tokens if token]
    return tokens


def combine_texts(*parts: str) -> str:
    """Join text fields with single spaces, the way the form concatenates them."""
    return " ".join(parts)
