# ABOUTME: Runs every registered strategy against a candidate and aggregates the outcome.
# ABOUTME: Validates strategy names and weights once at construction, never during scoring.

import functools
import math
from collections.abc import Callable, Iterable, Mapping

from findthatbook.errors import MatchingConfigurationError
from findthatbook.matching.constants import WEIGHT_SUM_TOLERANCE
from findthatbook.matching.evaluator import evaluate_match_strength
from findthatbook.matching.strategies import MatchingStrategy, default_strategies
from findthatbook.matching.types import (
    CandidateRecord,
    MatchResult,
    MatchStrength,
    SearchIntent,
    StrategyScore,
)

StrengthEvaluator = Callable[[Mapping[str, StrategyScore]], MatchStrength]


class StrategyRegistry:
    """Ordered set of matching strategies plus the tier evaluator.

    Strategies run in the order given. That order is observable: it fixes the
    order of MatchResult.reasons.
    """

    def __init__(
        self,
        strategies: Iterable[MatchingStrategy],
        evaluator: StrengthEvaluator = evaluate_match_strength,
    ) -> None:
        self._strategies = tuple(strategies)
        self._evaluator = evaluator
        self._validate()

    @property
    def strategies(self) -> tuple[MatchingStrategy, ...]:
        return self._strategies

    def _validate(self) -> None:
        """Fail fast on duplicate strategy names or weights not summing to 1.0."""
        if not self._strategies:
            raise MatchingConfigurationError("At least one matching strategy is required")

        seen: set[str] = set()
        for strategy in self._strategies:
            if strategy.name in seen:
                msg = f"Duplicate matching strategy name: {strategy.name!r}"
                raise MatchingConfigurationError(msg)
            seen.add(strategy.name)

        total = math.fsum(s.weight for s in self._strategies)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            msg = f"Matching strategy weights must sum to 1.0, got {total:.4f}"
            raise MatchingConfigurationError(msg)

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> MatchResult:
        """Score one candidate against the intent with every strategy."""
        scores: dict[str, StrategyScore] = {}
        reasons: list[str] = []
        total = 0.0

        for strategy in self._strategies:
            if strategy.can_evaluate(intent):
                score = strategy.evaluate(record, intent)
            else:
                score = StrategyScore.no_match(strategy.weight)

            scores[strategy.name] = score
            total += score.weighted_score
            if score.has_match and score.reason:
                reasons.append(score.reason)

        return MatchResult(
            strategy_scores=scores,
            total_score=round(total, 2),
            match_strength=self._evaluator(scores),
            reasons=tuple(reasons),
        )


@functools.cache
def default_registry() -> StrategyRegistry:
    """Shared registry with the title, author, year, and keyword strategies.

    Built and validated once per process.
    """
    return StrategyRegistry(default_strategies())
