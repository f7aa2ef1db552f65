# ABOUTME: Text canonicalization used by every matching strategy before comparison.
# ABOUTME: Lower-cases, strips a fixed punctuation set, and turns separators into spaces.

import re

# Characters dropped outright: "J.R.R." -> "jrr", "Hobbit," -> "hobbit".
_STRIP_RE = re.compile(r"[.,'\"]")
# Structural separators that become word boundaries: "Catch-22" -> "catch 22".
_SEPARATOR_RE = re.compile(r"[-_]")


def normalize(text: str | None) -> str:
    """Canonicalize a string for case- and punctuation-insensitive comparison.

    Empty, whitespace-only, or None input yields an empty string. Inner
    whitespace is left as-is; use split_into_words() for token comparison.
    """
    if text is None or not text.strip():
        return ""

    result = text.lower()
    result = _STRIP_RE.sub("", result)
    result = _SEPARATOR_RE.sub(" ", result)
    return result.strip()


def split_into_words(text: str | None) -> list[str]:
    """Normalize then split on whitespace, dropping empty tokens."""
    return normalize(text).split()
