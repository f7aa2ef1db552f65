# ABOUTME: Shared pytest fixtures for FindThatBook tests.
# ABOUTME: Provides sample catalog records, intents, and a record factory.

from collections.abc import Callable
from typing import Any

import pytest

from findthatbook.matching.types import CandidateRecord, SearchIntent


@pytest.fixture
def make_record() -> Callable[..., CandidateRecord]:
    """Factory for CandidateRecords with sensible defaults and per-test overrides."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> CandidateRecord:
        counter["n"] += 1
        fields: dict[str, Any] = {
            "key": f"/works/OL{counter['n']}W",
            "title": "Untitled",
            "authors": (),
            "first_publish_year": None,
            "subjects": (),
        }
        fields.update(overrides)
        return CandidateRecord(**fields)

    return _make


@pytest.fixture
def hobbit_record() -> CandidateRecord:
    """The Hobbit as Open Library lists it."""
    return CandidateRecord(
        key="/works/OL27482W",
        title="The Hobbit, or There and Back Again",
        authors=("J.R.R. Tolkien",),
        first_publish_year=1937,
        subjects=("Fantasy", "Adventure", "Dragons"),
        cover_id="6979861",
    )


@pytest.fixture
def huck_finn_record() -> CandidateRecord:
    return CandidateRecord(
        key="/works/OL53908W",
        title="The Adventures of Huckleberry Finn",
        authors=("Mark Twain",),
        first_publish_year=1884,
        subjects=("Adventure stories", "Mississippi River"),
    )


@pytest.fixture
def huck_finn_intent() -> SearchIntent:
    return SearchIntent(
        title="The Adventures of Huckleberry Finn",
        author="Mark Twain",
        original_query="mark huckleberry",
    )
