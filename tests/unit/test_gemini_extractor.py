# ABOUTME: Unit tests for the Gemini-backed intent extractor.
# ABOUTME: Uses a FakeHttpClient to test request shape, response parsing, fallback, and errors.

from typing import Any

import pytest

from findthatbook.config import GeminiSettings
from findthatbook.errors import IntentExtractionError
from findthatbook.sources.gemini import (
    GeminiIntentExtractor,
    build_prompt,
    parse_extraction,
)
from findthatbook.sources.http import FetchError
from findthatbook.sources.provider import IntentExtractor
from tests.fixtures.gemini_responses import (
    EMPTY_CANDIDATES,
    HOBBIT_EXTRACTION,
    HUCK_FINN_FENCED_EXTRACTION,
    NOT_JSON_EXTRACTION,
    generate_content_response,
)


class FakeHttpClient:
    """Fake HTTP client that returns (or raises) one canned POST response."""

    def __init__(self, response: Any = None) -> None:
        self._response = response
        self.posts: list[tuple[str, dict[str, Any], dict[str, str] | None]] = []

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        raise AssertionError("Gemini extraction never GETs")

    def post_json(
        self, url: str, payload: dict[str, Any], params: dict[str, str] | None = None
    ) -> Any:
        self.posts.append((url, payload, params))
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _extractor(
    response: Any, api_key: str = "test-key"
) -> tuple[GeminiIntentExtractor, FakeHttpClient]:
    client = FakeHttpClient(response)
    return GeminiIntentExtractor(client, GeminiSettings(api_key=api_key)), client


class TestGeminiIntentExtractor:
    """Tests for GeminiIntentExtractor.extract()."""

    def test_satisfies_protocol(self) -> None:
        extractor, _ = _extractor(HOBBIT_EXTRACTION)
        assert isinstance(extractor, IntentExtractor)
        assert extractor.name == "gemini"

    def test_extracts_all_fields(self) -> None:
        extractor, _ = _extractor(HOBBIT_EXTRACTION)

        intent = extractor.extract("tolkien hobbit illustrated 1937")

        assert intent.title == "The Hobbit"
        assert intent.author == "J.R.R. Tolkien"
        assert intent.year == 1937
        assert intent.keywords == ("illustrated",)
        assert intent.original_query == "tolkien hobbit illustrated 1937"

    def test_request_shape(self) -> None:
        extractor, client = _extractor(HOBBIT_EXTRACTION)
        extractor.extract("tolkien hobbit")

        url, payload, params = client.posts[0]
        assert url.endswith("/models/gemini-1.5-flash:generateContent")
        assert params == {"key": "test-key"}
        assert payload["generationConfig"] == {"temperature": 0.1, "maxOutputTokens": 256}
        assert 'Query: "tolkien hobbit"' in payload["contents"][0]["parts"][0]["text"]

    def test_code_fences_are_stripped(self) -> None:
        extractor, _ = _extractor(HUCK_FINN_FENCED_EXTRACTION)

        intent = extractor.extract("mark huckleberry")

        assert intent.title == "The Adventures of Huckleberry Finn"
        assert intent.author == "Mark Twain"
        assert intent.year is None
        assert intent.keywords == ()

    def test_missing_api_key_uses_fallback(self, caplog) -> None:
        extractor, client = _extractor(HOBBIT_EXTRACTION, api_key="")

        intent = extractor.extract("tolkien hobbit")

        assert client.posts == []
        assert intent.title is None
        assert intent.keywords == ("tolkien", "hobbit")
        assert "No Gemini API key" in caplog.text

    def test_non_json_answer_fails_parsing(self) -> None:
        extractor, _ = _extractor(NOT_JSON_EXTRACTION)
        with pytest.raises(IntentExtractionError, match="Failed to parse AI response"):
            extractor.extract("the hobbit")

    def test_empty_candidates_is_invalid_response(self) -> None:
        extractor, _ = _extractor(EMPTY_CANDIDATES)
        with pytest.raises(IntentExtractionError, match="Empty response from Gemini API"):
            extractor.extract("the hobbit")

    def test_transport_failure_is_api_call_failure(self) -> None:
        extractor, _ = _extractor(FetchError("Request failed: connection refused"))
        with pytest.raises(IntentExtractionError) as exc_info:
            extractor.extract("the hobbit")
        assert exc_info.value.message == "Failed to call Gemini API for book extraction"
        assert exc_info.value.error_code == "AI_EXTRACTION_FAILED"

    def test_http_error_is_invalid_response(self) -> None:
        extractor, _ = _extractor(FetchError("HTTP 400 from gemini", 400))
        with pytest.raises(IntentExtractionError, match="Invalid AI response: HTTP 400"):
            extractor.extract("the hobbit")


class TestParseExtraction:
    """Tests for parse_extraction() field coercion."""

    def test_null_strings_become_none(self) -> None:
        intent = parse_extraction('{"title": "null", "author": "  ", "keywords": []}', "q")
        assert intent.title is None
        assert intent.author is None

    def test_year_coercion(self) -> None:
        assert parse_extraction('{"year": "1937"}', "q").year == 1937
        assert parse_extraction('{"year": 1937.0}', "q").year == 1937
        assert parse_extraction('{"year": "late 1930s"}', "q").year is None
        assert parse_extraction('{"year": true}', "q").year is None

    def test_keywords_drop_non_strings_and_blanks(self) -> None:
        intent = parse_extraction('{"keywords": ["illustrated", 3, " ", " maps "]}', "q")
        assert intent.keywords == ("illustrated", "maps")

    def test_non_object_json_fails(self) -> None:
        with pytest.raises(IntentExtractionError):
            parse_extraction('["The Hobbit"]', "q")

    def test_wrapped_text_round_trip(self) -> None:
        response = generate_content_response('{"title": "Dune"}')
        extractor, _ = _extractor(response)
        assert extractor.extract("dune").title == "Dune"


def test_prompt_embeds_query() -> None:
    prompt = build_prompt("mark huckleberry")
    assert 'Query: "mark huckleberry"' in prompt
    assert prompt.rstrip().endswith("Respond with ONLY the JSON object, nothing else.")
