# ABOUTME: Gemini-backed intent extraction for unstructured book queries.
# ABOUTME: Prompts the generateContent API for title/author/year/keywords JSON and parses it.

import json
import logging
from typing import Any

from findthatbook.config import GeminiSettings
from findthatbook.errors import IntentExtractionError
from findthatbook.matching.types import SearchIntent
from findthatbook.sources.fallback import fallback_intent
from findthatbook.sources.http import FetchError, HttpClient

logger = logging.getLogger(__name__)

_SERVICE_NAME = "Gemini"

_PROMPT_TEMPLATE = """\
You are a book identification assistant. Extract structured information from \
the following book search query.

Query: "{query}"

Extract the following information and respond ONLY with a valid JSON object \
(no markdown, no code blocks):
{{
    "title": "extracted book title or null if not identifiable",
    "author": "extracted author name or null if not identifiable",
    "year": extracted year as number or null if not present,
    "keywords": ["array", "of", "relevant", "keywords"]
}}

Rules:
- For author names, use the full name if possible (e.g., "Mark Twain" not "Twain")
- Keywords should include any descriptive terms like "illustrated", "first edition", etc.
- If the query seems to contain a misspelling, try to identify the correct title/author
- Common patterns: "author title", "title author", "title year", etc.
- Examples of queries and expected extractions:
  - "mark huckleberry" -> title: "The Adventures of Huckleberry Finn", author: "Mark Twain"
  - "tolkien hobbit illustrated 1937" -> title: "The Hobbit", author: "J.R.R. Tolkien", \
year: 1937, keywords: ["illustrated"]

Respond with ONLY the JSON object, nothing else."""


def build_prompt(query: str) -> str:
    """Render the extraction prompt for one query."""
    return _PROMPT_TEMPLATE.format(query=query)


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return text.replace("```json", "").replace("```", "").strip()


def _optional_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value.lower() == "null":
        return None
    return value


def _optional_year(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _keywords(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(k.strip() for k in value if isinstance(k, str) and k.strip())


def parse_extraction(text: str, original_query: str) -> SearchIntent:
    """Parse the model's JSON answer into a SearchIntent.

    Raises:
        IntentExtractionError: When the text is not a JSON object.
    """
    try:
        parsed = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse Gemini response: %s", text)
        raise IntentExtractionError.parsing_failed(text) from exc

    if not isinstance(parsed, dict):
        logger.warning("Gemini response is not a JSON object: %s", text)
        raise IntentExtractionError.parsing_failed(text)

    return SearchIntent(
        title=_optional_str(parsed.get("title")),
        author=_optional_str(parsed.get("author")),
        year=_optional_year(parsed.get("year")),
        keywords=_keywords(parsed.get("keywords")),
        original_query=original_query,
    )


def _response_text(data: Any) -> str | None:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


class GeminiIntentExtractor:
    """Intent extractor backed by Google's Gemini generateContent API.

    Without an API key no request is made: the extractor logs a warning and
    answers with the local keyword-only fallback intent.
    """

    def __init__(self, http_client: HttpClient, settings: GeminiSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or GeminiSettings()

    @property
    def name(self) -> str:
        return "gemini"

    def extract(self, query: str) -> SearchIntent:
        """Extract a SearchIntent from a raw query.

        Raises:
            IntentExtractionError: When the API call fails, returns no
                content, or returns content that is not a JSON object.
        """
        if not self._settings.api_key:
            logger.warning("No Gemini API key configured, using keyword fallback for %r", query)
            return fallback_intent(query)

        text = self._call_api(build_prompt(query))
        intent = parse_extraction(text, query)

        logger.info(
            "Extracted book info from query '%s': title=%r, author=%r, year=%r, keywords=[%s]",
            query,
            intent.title,
            intent.author,
            intent.year,
            ", ".join(intent.keywords),
        )
        return intent

    def _call_api(self, prompt: str) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self._settings.temperature,
                "maxOutputTokens": self._settings.max_output_tokens,
            },
        }
        try:
            data = self._http.post_json(
                self._settings.generate_url,
                payload,
                params={"key": self._settings.api_key},
            )
        except FetchError as exc:
            logger.error("Error calling Gemini API: %s", exc)
            if exc.status_code is None:
                raise IntentExtractionError.api_call_failed(_SERVICE_NAME) from exc
            raise IntentExtractionError.invalid_response(str(exc)) from exc

        text = _response_text(data)
        if text is None:
            raise IntentExtractionError.invalid_response("Empty response from Gemini API")
        return text
