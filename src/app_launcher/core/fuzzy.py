"""Fuzzy subsequence scoring.

A pattern matches when every one of its characters appears in the text in
order (case-insensitive). Matches are scored from three parts:

- the number of matched characters, so longer queries rank higher;
- how contiguous the match is, taken from rapidfuzz's ``partial_ratio``;
- where it starts: at the start of the text, at the start of a word, or
  spread over word initials ("du" in "Disk Usage").

The score does not depend on the length of the text, so two titles that
match the same way score the same.
"""

from __future__ import annotations

import re

from rapidfuzz import fuzz
from rapidfuzz.distance import LCSseq

SCORE_MATCH = 16
BONUS_PREFIX = 48
BONUS_WORD_START = 40
BONUS_INITIALS = 32

_WORD_RE = re.compile(r"\w+")


def is_subsequence(pattern: str, text: str) -> bool:
    """Check that every character of pattern appears in text, in order."""
    return LCSseq.similarity(pattern, text) == len(pattern)


def _position_bonus(haystack: str, needle: str) -> int:
    if haystack.startswith(needle):
        return BONUS_PREFIX

    words = _WORD_RE.findall(haystack)
    if any(word.startswith(needle) for word in words):
        return BONUS_WORD_START

    initials = "".join(word[0] for word in words)
    if is_subsequence(needle, initials):
        return BONUS_INITIALS
    return 0


def fuzzy_score(text: str, pattern: str) -> int | None:
    """Score ``pattern`` as a fuzzy subsequence of ``text``.

    Args:
        text: The string searched (e.g. an entry title)
        pattern: The query

    Returns:
        Match score (higher is better), or None if there is no match

    Examples:
        >>> fuzzy_score("Firefox", "ffx") is not None
        True
        >>> fuzzy_score("GIMP", "fi") is None
        True
    """
    if not pattern:
        return 0

    haystack = text.lower()
    needle = pattern.lower()
    if not is_subsequence(needle, haystack):
        return None

    contiguity = int(round(fuzz.partial_ratio(needle, haystack))) // 2
    return SCORE_MATCH * len(needle) + contiguity + _position_bonus(haystack, needle)
