# ABOUTME: Matching engine package: strategies, registry, tier evaluation, and ranking.
# ABOUTME: Exports the value objects and entry points used by the search use case and the CLI.

from findthatbook.matching.evaluator import evaluate_match_strength
from findthatbook.matching.ranking import rank_candidates
from findthatbook.matching.registry import StrategyRegistry, default_registry
from findthatbook.matching.types import (
    CandidateRecord,
    MatchResult,
    MatchStrength,
    RankedCandidate,
    SearchIntent,
    StrategyScore,
)

__all__ = [
    "CandidateRecord",
    "MatchResult",
    "MatchStrength",
    "RankedCandidate",
    "SearchIntent",
    "StrategyRegistry",
    "StrategyScore",
    "default_registry",
    "evaluate_match_strength",
    "rank_candidates",
]
