# ABOUTME: Parsing functions for Open Library search API JSON responses.
# ABOUTME: Converts search docs into CandidateRecord instances for the matching engine.

from typing import Any

from findthatbook.matching.types import CandidateRecord

_UNKNOWN_TITLE = "Unknown Title"
_MAX_SUBJECTS = 10
_MAX_PUBLISHERS = 5


def _as_int(value: Any) -> int | None:
    """Coerce an OL numeric field, tolerating strings and junk."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def parse_search_doc(doc: dict[str, Any]) -> CandidateRecord:
    """Parse a single search doc into a CandidateRecord.

    Missing titles become "Unknown Title"; subjects are capped at 10 and
    publishers at 5; only the first ISBN is kept.
    """
    isbns = _as_strings(doc.get("isbn"))
    cover = _as_int(doc.get("cover_i"))

    return CandidateRecord(
        key=doc.get("key") or "",
        title=doc.get("title") or _UNKNOWN_TITLE,
        authors=_as_strings(doc.get("author_name")),
        first_publish_year=_as_int(doc.get("first_publish_year")),
        subjects=_as_strings(doc.get("subject"))[:_MAX_SUBJECTS],
        cover_id=str(cover) if cover is not None else None,
        isbn=isbns[0] if isbns else None,
        publishers=_as_strings(doc.get("publisher"))[:_MAX_PUBLISHERS],
        languages=_as_strings(doc.get("language")),
        number_of_pages=_as_int(doc.get("number_of_pages_median")),
    )


def parse_search_results(data: dict[str, Any]) -> list[CandidateRecord]:
    """Parse an Open Library Search API response into a list of CandidateRecord.

    Non-dict docs are skipped. A response without "docs" yields an empty list.
    """
    docs = data.get("docs") or []
    return [parse_search_doc(doc) for doc in docs if isinstance(doc, dict)]
