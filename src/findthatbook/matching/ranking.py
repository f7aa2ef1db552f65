# ABOUTME: Ranks catalog candidates against a search intent into a bounded, ordered list.
# ABOUTME: Drops non-matches and sorts by tier then score, preserving input order on ties.

from collections.abc import Iterable

from findthatbook.matching.registry import StrategyRegistry, default_registry
from findthatbook.matching.types import (
    CandidateRecord,
    MatchStrength,
    RankedCandidate,
    SearchIntent,
)

DEFAULT_MAX_CANDIDATES = 5


def rank_candidates(
    records: Iterable[CandidateRecord],
    intent: SearchIntent,
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
    registry: StrategyRegistry | None = None,
) -> list[RankedCandidate]:
    """Score, filter, sort, and truncate candidate records.

    Candidates classified as MatchStrength.NONE are excluded. The rest are
    ordered by (match_strength, match_score), both descending. Python's sort
    is stable, so full ties keep their input order.
    """
    if max_candidates <= 0:
        return []

    registry = registry or default_registry()

    ranked: list[RankedCandidate] = []
    for record in records:
        result = registry.evaluate(record, intent)
        if result.match_strength is MatchStrength.NONE:
            continue
        ranked.append(
            RankedCandidate(
                record=record,
                match_strength=result.match_strength,
                match_score=result.total_score,
                match_reasons=result.reasons,
            )
        )

    ranked.sort(key=lambda c: (c.match_strength, c.match_score), reverse=True)
    return ranked[:max_candidates]
