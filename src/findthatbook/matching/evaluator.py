# ABOUTME: Maps per-strategy scores to an ordinal MatchStrength tier.
# ABOUTME: A priority-ordered rule chain where the first satisfied rule wins.

from collections.abc import Mapping

from findthatbook.matching import constants as c
from findthatbook.matching.types import MatchStrength, StrategyScore


def _score(scores: Mapping[str, StrategyScore], name: str) -> float:
    entry = scores.get(name)
    return entry.score if entry is not None else 0.0


def evaluate_match_strength(scores: Mapping[str, StrategyScore]) -> MatchStrength:
    """Classify a candidate from its strategy scores.

    Missing strategies count as a score of 0. Rules, in order:

    1. Exact: title and author both >= 0.95.
    2. Strong: title and author both >= 0.70.
    3. Strong: title >= 0.85 with author >= 0.50.
    4. Partial: title or author >= 0.60.
    5. Partial: title or author >= 0.40, confirmed by year >= 0.80.
    6. Weak: keyword, title, or author >= 0.30.
    7. None otherwise.
    """
    title = _score(scores, c.TITLE)
    author = _score(scores, c.AUTHOR)
    year = _score(scores, c.YEAR)
    keyword = _score(scores, c.KEYWORD)

    if title >= c.EXACT_MATCH_THRESHOLD and author >= c.EXACT_MATCH_THRESHOLD:
        return MatchStrength.EXACT

    if title >= c.STRONG_MATCH_THRESHOLD and author >= c.STRONG_MATCH_THRESHOLD:
        return MatchStrength.STRONG

    if title >= c.HIGH_TITLE_THRESHOLD and author >= c.TITLE_WORD_MATCH_RATIO_THRESHOLD:
        return MatchStrength.STRONG

    if title >= c.PARTIAL_MATCH_THRESHOLD or author >= c.PARTIAL_MATCH_THRESHOLD:
        return MatchStrength.PARTIAL

    if (
        title >= c.MODERATE_MATCH_THRESHOLD or author >= c.MODERATE_MATCH_THRESHOLD
    ) and year >= c.YEAR_CONFIRMATION_THRESHOLD:
        return MatchStrength.PARTIAL

    if (
        keyword >= c.WEAK_MATCH_THRESHOLD
        or title >= c.WEAK_MATCH_THRESHOLD
        or author >= c.WEAK_MATCH_THRESHOLD
    ):
        return MatchStrength.WEAK

    return MatchStrength.NONE
