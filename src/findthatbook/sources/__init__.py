# ABOUTME: Upstream collaborators of the matching engine: intent extraction and catalog search.
# ABOUTME: Exports the protocols plus the Gemini, fallback, and Open Library implementations.

from findthatbook.sources.fallback import FallbackIntentExtractor, fallback_intent
from findthatbook.sources.gemini import GeminiIntentExtractor
from findthatbook.sources.http import FetchError, FindThatBookHttpClient, HttpClient
from findthatbook.sources.openlibrary import OpenLibrarySearch
from findthatbook.sources.provider import CatalogSearch, IntentExtractor

__all__ = [
    "CatalogSearch",
    "FallbackIntentExtractor",
    "FetchError",
    "FindThatBookHttpClient",
    "GeminiIntentExtractor",
    "HttpClient",
    "IntentExtractor",
    "OpenLibrarySearch",
    "fallback_intent",
]
