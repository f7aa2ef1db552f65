# ABOUTME: Value objects for the matching engine: intents, catalog records, scores, and results.
# ABOUTME: All are frozen dataclasses built fresh per evaluation and never mutated afterwards.

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"
_OL_BASE = "https://openlibrary.org"

_NO_MATCH_EXPLANATION = "No significant match found"


class MatchStrength(IntEnum):
    """Ordinal match tier. Integer-backed so descending sorts are numeric."""

    NONE = 0
    WEAK = 1
    PARTIAL = 2
    STRONG = 3
    EXACT = 4

    @property
    def label(self) -> str:
        """Display name, e.g. "Exact" or "Partial"."""
        return self.name.capitalize()


@dataclass(frozen=True)
class SearchIntent:
    """Structured, possibly partial description of the book a user is after.

    Produced by an intent extractor from a free-text query. Every field is
    optional; strategies only evaluate the signals that are actually present.
    """

    title: str | None = None
    author: str | None = None
    keywords: tuple[str, ...] = ()
    year: int | None = None
    original_query: str | None = None

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store an immutable tuple.
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def has_title(self) -> bool:
        return bool(self.title and self.title.strip())

    @property
    def has_author(self) -> bool:
        return bool(self.author and self.author.strip())

    @property
    def has_keywords(self) -> bool:
        return len(self.keywords) > 0


@dataclass(frozen=True)
class CandidateRecord:
    """One bibliographic entry returned by the catalog search.

    Only key, title, authors, first_publish_year, and subjects feed the
    matching strategies; the rest is carried through for display.
    """

    key: str
    title: str
    authors: tuple[str, ...] = ()
    first_publish_year: int | None = None
    subjects: tuple[str, ...] = ()
    cover_id: str | None = None
    isbn: str | None = None
    publishers: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    number_of_pages: int | None = None

    def __post_init__(self) -> None:
        for name in ("authors", "subjects", "publishers", "languages"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def cover_url(self) -> str:
        if not self.cover_id:
            return ""
        return f"{_COVERS_BASE_URL}/{self.cover_id}-M.jpg"

    @property
    def openlibrary_url(self) -> str:
        return f"{_OL_BASE}{self.key}"


@dataclass(frozen=True)
class StrategyScore:
    """Outcome of one strategy for one candidate.

    The score is clamped to [0.0, 1.0] on construction, however the instance
    is built. Prefer the create() and no_match() factories.
    """

    score: float
    weight: float
    reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", max(0.0, min(1.0, self.score)))

    @classmethod
    def create(cls, score: float, weight: float, reason: str) -> "StrategyScore":
        return cls(score=score, weight=weight, reason=reason)

    @classmethod
    def no_match(cls, weight: float) -> "StrategyScore":
        return cls(score=0.0, weight=weight, reason=None)

    @property
    def weighted_score(self) -> float:
        """Contribution to the 0-100 total score."""
        return self.score * self.weight * 100

    @property
    def has_match(self) -> bool:
        return self.score > 0


@dataclass(frozen=True)
class MatchResult:
    """Aggregated result of running every strategy against one candidate."""

    strategy_scores: Mapping[str, StrategyScore]
    total_score: float
    match_strength: MatchStrength
    reasons: tuple[str, ...] = ()

    def get_score(self, strategy_name: str) -> StrategyScore | None:
        return self.strategy_scores.get(strategy_name)


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate record with its tier, total score, and explanation."""

    record: CandidateRecord
    match_strength: MatchStrength
    match_score: float
    match_reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def match_explanation(self) -> str:
        if self.match_strength is MatchStrength.NONE:
            return _NO_MATCH_EXPLANATION
        return f"{self.match_strength.label} match: {'; '.join(self.match_reasons)}"
