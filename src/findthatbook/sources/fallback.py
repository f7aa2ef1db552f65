# ABOUTME: Local, deterministic intent extraction used when the AI extractor is unavailable.
# ABOUTME: Turns query words into keywords, splitting run-together tokens like "TheHobbit1937".

import re

import wordninja

from findthatbook.matching.types import SearchIntent

# All-lowercase tokens at least this long are assumed to be run-together words
# ("thenameoftherose"). Shorter ones ("huckleberry", "silmarillion") are kept whole.
_MIN_CONCAT_LENGTH = 16

_CAMEL_CASE_RE = re.compile(r"[a-z][A-Z]")
_CAMEL_LOWER_UPPER_RE = re.compile(r"([a-z\d])([A-Z])")
_CAMEL_UPPER_SEQUENCE_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LETTER_DIGIT_RE = re.compile(r"([a-zA-Z])(\d)")
_DIGIT_LETTER_RE = re.compile(r"(\d)([a-zA-Z])")
_LETTER_DIGIT_BOUNDARY_RE = re.compile(r"[a-zA-Z]\d|\d[a-zA-Z]")


def _needs_split(token: str) -> bool:
    """Check whether a single query token looks like several words glued together."""
    if "_" in token:
        return True
    if _CAMEL_CASE_RE.search(token) or _CAMEL_UPPER_SEQUENCE_RE.search(token):
        return True
    if _LETTER_DIGIT_BOUNDARY_RE.search(token):
        return True
    return token.isalpha() and token.islower() and len(token) >= _MIN_CONCAT_LENGTH


def _split_camel_case(text: str) -> list[str]:
    """Split a CamelCase string into individual words.

    Handles boundaries between:
    - lowercase -> uppercase ("theHobbit" -> "the", "Hobbit")
    - uppercase sequence -> uppercase+lowercase ("JRRTolkien" -> "JRR", "Tolkien")
    - letter -> digit and digit -> letter ("Hobbit1937" -> "Hobbit", "1937")
    """
    result = _CAMEL_LOWER_UPPER_RE.sub(r"\1_SPLIT_\2", text)
    result = _CAMEL_UPPER_SEQUENCE_RE.sub(r"\1_SPLIT_\2", result)
    result = _LETTER_DIGIT_RE.sub(r"\1_SPLIT_\2", result)
    result = _DIGIT_LETTER_RE.sub(r"\1_SPLIT_\2", result)

    parts = [p for p in result.split("_SPLIT_") if p]
    return parts if parts else [text]


def split_concatenated(token: str) -> list[str]:
    """Split one run-together query token into words.

    Underscores are structural separators; each segment is CamelCase-split,
    and long all-lowercase leftovers go through wordninja's unigram model.
    Tokens that do not look concatenated come back unchanged as [token].
    """
    if not _needs_split(token):
        return [token]

    words: list[str] = []
    for segment in token.split("_"):
        if not segment:
            continue
        for part in _split_camel_case(segment):
            if part.islower() and len(part) >= _MIN_CONCAT_LENGTH:
                words.extend(wordninja.split(part) or [part])
            else:
                words.append(part)
    return words or [token]


def fallback_intent(query: str) -> SearchIntent:
    """Build a keyword-only SearchIntent straight from the query text.

    No title, author, or year is guessed; matching then relies on the
    keyword strategy alone.
    """
    keywords: list[str] = []
    for token in query.split():
        keywords.extend(split_concatenated(token))
    return SearchIntent(keywords=tuple(keywords), original_query=query)


class FallbackIntentExtractor:
    """IntentExtractor that never calls out; wraps fallback_intent()."""

    @property
    def name(self) -> str:
        return "fallback"

    def extract(self, query: str) -> SearchIntent:
        return fallback_intent(query)
