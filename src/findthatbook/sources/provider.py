# ABOUTME: Protocols for the two upstream collaborators of the matching engine.
# ABOUTME: IntentExtractor turns a query into a SearchIntent; CatalogSearch returns candidates.

from typing import Protocol, runtime_checkable

from findthatbook.matching.types import CandidateRecord, SearchIntent


@runtime_checkable
class IntentExtractor(Protocol):
    """Protocol for services that structure a free-text book query."""

    @property
    def name(self) -> str: ...

    def extract(self, query: str) -> SearchIntent: ...


@runtime_checkable
class CatalogSearch(Protocol):
    """Protocol for bibliographic catalogs (Open Library, etc.).

    Implementations return records with unique keys, at most max_results.
    """

    @property
    def name(self) -> str: ...

    def search(self, intent: SearchIntent, max_results: int = 20) -> list[CandidateRecord]: ...
