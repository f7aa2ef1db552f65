# ABOUTME: Open Library catalog search implementation.
# ABOUTME: Fans out several search.json queries for an intent and returns deduplicated candidates.

import logging
from typing import Any

from findthatbook.config import CATALOG_FAN_OUT, OpenLibrarySettings
from findthatbook.errors import CatalogSearchError
from findthatbook.matching.types import CandidateRecord, SearchIntent
from findthatbook.sources.http import FetchError, HttpClient
from findthatbook.sources.openlibrary_parser import parse_search_results

logger = logging.getLogger(__name__)

_SEARCH_FIELDS = ",".join(
    [
        "key",
        "title",
        "author_name",
        "first_publish_year",
        "cover_i",
        "subject",
        "publisher",
        "isbn",
        "number_of_pages_median",
        "language",
    ]
)


def build_search_queries(intent: SearchIntent) -> list[dict[str, str]]:
    """Plan the search.json queries for an intent, most specific first.

    1. title + author, when both are known
    2. title only
    3. author only
    4. keywords as a general query
    5. the original query, only if nothing above applied
    """
    queries: list[dict[str, str]] = []

    if intent.has_title and intent.has_author:
        queries.append({"title": intent.title, "author": intent.author})
    if intent.has_title:
        queries.append({"title": intent.title})
    if intent.has_author:
        queries.append({"author": intent.author})
    if intent.has_keywords:
        queries.append({"q": " ".join(intent.keywords)})

    if not queries and intent.original_query and intent.original_query.strip():
        queries.append({"q": intent.original_query})

    return queries


class OpenLibrarySearch:
    """Catalog search backed by the Open Library search API.

    Uses dependency-injected HttpClient for testability.
    """

    def __init__(
        self, http_client: HttpClient, settings: OpenLibrarySettings | None = None
    ) -> None:
        self._http = http_client
        self._settings = settings or OpenLibrarySettings()

    @property
    def name(self) -> str:
        return "openlibrary"

    def search(
        self, intent: SearchIntent, max_results: int = CATALOG_FAN_OUT
    ) -> list[CandidateRecord]:
        """Run the query plan until max_results unique records are collected.

        Records are deduplicated by key, keeping the first one seen.

        Raises:
            CatalogSearchError: When Open Library cannot be reached or
                answers with an HTTP error.
        """
        records: list[CandidateRecord] = []
        seen_keys: set[str] = set()

        for query in build_search_queries(intent):
            if len(records) >= max_results:
                break

            for record in self._execute(query, max_results - len(records)):
                if record.key in seen_keys:
                    continue
                seen_keys.add(record.key)
                records.append(record)
                if len(records) >= max_results:
                    break

        logger.info(
            "Found %d books for query: %s",
            len(records),
            intent.original_query or query_summary(intent),
        )
        return records

    def _execute(self, query: dict[str, str], limit: int) -> list[CandidateRecord]:
        params = {**query, "limit": str(limit), "fields": _SEARCH_FIELDS}
        url = f"{self._settings.base_url}/search.json"
        logger.debug("Executing Open Library search: %s %s", url, query)

        try:
            data: Any = self._http.get(url, params=params)
        except FetchError as exc:
            if exc.status_code == 200:
                # Reachable but returned garbage: skip this query, keep the others.
                logger.warning("Unreadable search response for %s: %s", query, exc)
                return []
            logger.error("HTTP error executing search %s: %s", query, exc)
            raise CatalogSearchError.api_call_failed("Open Library") from exc

        if not isinstance(data, dict):
            logger.warning("Unexpected search response for %s: %r", query, type(data))
            return []

        return parse_search_results(data)


def query_summary(intent: SearchIntent) -> str:
    """Short human-readable description of an intent, for logs and headers."""
    parts = []
    if intent.has_title:
        parts.append(f"title={intent.title!r}")
    if intent.has_author:
        parts.append(f"author={intent.author!r}")
    if intent.year is not None:
        parts.append(f"year={intent.year}")
    if intent.has_keywords:
        parts.append(f"keywords={list(intent.keywords)!r}")
    return ", ".join(parts) or "(empty)"
