# ABOUTME: The book search use case: validate, extract intent, query the catalog, rank.
# ABOUTME: Produces a SearchResponse with ranked candidates and wall-clock processing time.

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from findthatbook.config import (
    CATALOG_FAN_OUT,
    DEFAULT_MAX_RESULTS,
    MAX_MAX_RESULTS,
    MAX_QUERY_LENGTH,
    MIN_MAX_RESULTS,
    MIN_QUERY_LENGTH,
)
from findthatbook.errors import ValidationError
from findthatbook.matching.ranking import rank_candidates
from findthatbook.matching.registry import StrategyRegistry, default_registry
from findthatbook.matching.types import RankedCandidate, SearchIntent
from findthatbook.sources.provider import CatalogSearch, IntentExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    """A raw user query plus the number of candidates wanted back."""

    query: str
    max_results: int = DEFAULT_MAX_RESULTS

    def validate(self) -> None:
        """Raise ValidationError unless the query and max_results are in bounds."""
        if not self.query or not self.query.strip():
            raise ValidationError.null_or_empty("query")

        length = len(self.query.strip())
        if length < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"query must be at least {MIN_QUERY_LENGTH} characters long", "query"
            )
        if length > MAX_QUERY_LENGTH:
            raise ValidationError(
                f"query cannot exceed {MAX_QUERY_LENGTH} characters", "query"
            )

        if not MIN_MAX_RESULTS <= self.max_results <= MAX_MAX_RESULTS:
            raise ValidationError.out_of_range(
                "max_results", MIN_MAX_RESULTS, MAX_MAX_RESULTS, self.max_results
            )


def candidate_to_dict(candidate: RankedCandidate) -> dict[str, Any]:
    """Serialize a ranked candidate for JSON output."""
    record = candidate.record
    return {
        "key": record.key,
        "title": record.title,
        "authors": list(record.authors),
        "first_publish_year": record.first_publish_year,
        "cover_url": record.cover_url or None,
        "openlibrary_url": record.openlibrary_url,
        "match_strength": candidate.match_strength.label,
        "match_score": candidate.match_score,
        "match_explanation": candidate.match_explanation,
        "match_reasons": list(candidate.match_reasons),
    }


def intent_to_dict(intent: SearchIntent) -> dict[str, Any]:
    return {
        "title": intent.title,
        "author": intent.author,
        "keywords": list(intent.keywords),
        "year": intent.year,
    }


@dataclass
class SearchResponse:
    """Outcome of one search: the intent used and the ranked candidates."""

    original_query: str
    intent: SearchIntent
    candidates: list[RankedCandidate] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def total_candidates(self) -> int:
        return len(self.candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_query": self.original_query,
            "extracted_info": intent_to_dict(self.intent),
            "candidates": [candidate_to_dict(c) for c in self.candidates],
            "total_candidates": self.total_candidates,
            "processing_time": round(self.processing_time, 3),
        }


class BookSearch:
    """Orchestrates intent extraction, catalog search, and ranking.

    Collaborators are injected so tests can swap in fakes; the registry
    defaults to the standard title/author/year/keyword strategies.
    """

    def __init__(
        self,
        extractor: IntentExtractor,
        catalog: CatalogSearch,
        registry: StrategyRegistry | None = None,
        *,
        fan_out: int = CATALOG_FAN_OUT,
    ) -> None:
        self._extractor = extractor
        self._catalog = catalog
        self._registry = registry or default_registry()
        self._fan_out = fan_out

    def execute(self, request: SearchRequest) -> SearchResponse:
        """Run the full search for a validated request.

        Raises:
            ValidationError: If the request is out of bounds.
            IntentExtractionError: If the extractor fails.
            CatalogSearchError: If the catalog cannot be queried.
        """
        request.validate()
        started = time.perf_counter()

        intent = self._extractor.extract(request.query)
        return self._run(request.query, intent, request.max_results, started)

    def execute_intent(
        self, intent: SearchIntent, max_results: int = DEFAULT_MAX_RESULTS
    ) -> SearchResponse:
        """Search with an already-structured intent, skipping extraction."""
        query = intent.original_query or ""
        if not MIN_MAX_RESULTS <= max_results <= MAX_MAX_RESULTS:
            raise ValidationError.out_of_range(
                "max_results", MIN_MAX_RESULTS, MAX_MAX_RESULTS, max_results
            )
        return self._run(query, intent, max_results, time.perf_counter())

    def _run(
        self, query: str, intent: SearchIntent, max_results: int, started: float
    ) -> SearchResponse:
        records = self._catalog.search(intent, max_results=self._fan_out)
        candidates = rank_candidates(records, intent, max_results, self._registry)
        elapsed = time.perf_counter() - started

        logger.info(
            "Ranked %d of %d catalog records for %r in %.2fs",
            len(candidates),
            len(records),
            query,
            elapsed,
        )
        return SearchResponse(
            original_query=query,
            intent=intent,
            candidates=candidates,
            processing_time=elapsed,
        )
