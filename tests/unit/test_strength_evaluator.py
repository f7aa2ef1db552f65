# ABOUTME: Unit tests for mapping per-strategy scores to a MatchStrength tier.
# ABOUTME: Walks the rule chain in priority order, including threshold boundaries.

from findthatbook.matching.evaluator import evaluate_match_strength
from findthatbook.matching.types import MatchStrength, StrategyScore


def _scores(
    title: float = 0.0, author: float = 0.0, year: float = 0.0, keyword: float = 0.0
) -> dict[str, StrategyScore]:
    return {
        "Title": StrategyScore(title, 0.40),
        "Author": StrategyScore(author, 0.35),
        "Year": StrategyScore(year, 0.10),
        "Keyword": StrategyScore(keyword, 0.15),
    }


class TestEvaluateMatchStrength:
    """Tests for evaluate_match_strength()."""

    def test_exact_requires_title_and_author(self) -> None:
        assert evaluate_match_strength(_scores(title=1.0, author=1.0)) is MatchStrength.EXACT
        assert evaluate_match_strength(_scores(title=0.95, author=0.95)) is MatchStrength.EXACT

    def test_strong_title_and_author(self) -> None:
        assert evaluate_match_strength(_scores(title=0.75, author=0.70)) is MatchStrength.STRONG

    def test_strong_high_title_with_moderate_author(self) -> None:
        assert evaluate_match_strength(_scores(title=0.85, author=0.50)) is MatchStrength.STRONG

    def test_high_title_with_weak_author_is_partial(self) -> None:
        assert evaluate_match_strength(_scores(title=0.85, author=0.49)) is MatchStrength.PARTIAL

    def test_partial_from_title_or_author_alone(self) -> None:
        assert evaluate_match_strength(_scores(title=1.0)) is MatchStrength.PARTIAL
        assert evaluate_match_strength(_scores(author=0.65)) is MatchStrength.PARTIAL

    def test_partial_from_moderate_title_confirmed_by_year(self) -> None:
        assert evaluate_match_strength(_scores(title=0.4, year=0.8)) is MatchStrength.PARTIAL

    def test_moderate_title_without_year_confirmation_is_weak(self) -> None:
        assert evaluate_match_strength(_scores(title=0.4, year=0.5)) is MatchStrength.WEAK

    def test_weak_from_keywords(self) -> None:
        assert evaluate_match_strength(_scores(keyword=0.3)) is MatchStrength.WEAK

    def test_year_alone_is_none(self) -> None:
        assert evaluate_match_strength(_scores(year=1.0)) is MatchStrength.NONE

    def test_below_weak_threshold_is_none(self) -> None:
        assert evaluate_match_strength(_scores(keyword=0.29, title=0.1)) is MatchStrength.NONE

    def test_missing_strategies_count_as_zero(self) -> None:
        assert evaluate_match_strength({}) is MatchStrength.NONE
        only_title = {"Title": StrategyScore(1.0, 0.40)}
        assert evaluate_match_strength(only_title) is MatchStrength.PARTIAL
