from __future__ import annotations

import re

VOWELS = "aeiouy"
VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")


def count_syllables(word: str) -> int:
    """
    Estimate the syllables in a single word.

    Words of three characters or fewer (including the empty string) count as
    one syllable. Longer words count greedy one-or-two vowel groups, then lose
    one syllable for a silent suffix. The result is never below 1.
    """
    if len(word) <= 3:
        return 1
    word = word.lower()
    syllables = len(VOWEL_GROUP_RE.findall(word)) or 1
    if _has_silent_suffix(word):
        syllables -= 1
    return max(1, syllables)


def _has_silent_suffix(word: str) -> bool:
    if word.endswith("es") and not word.endswith("sses"):
        return True
    if word.endswith("ed") and not word.endswith("lled"):
        return True
    # NOTE: trailing "e" only counts as silent when a non-vowel precedes it;
    # "tree" and "queue" keep their count. Kept as-is for score compatibility.
    return word.endswith("e") and word[-2] not in VOWELS
