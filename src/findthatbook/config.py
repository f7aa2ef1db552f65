# ABOUTME: Settings for the external services and limits on search requests.
# ABOUTME: Plain dataclasses with defaults; the CLI overrides fields from its options.

import os
from dataclasses import dataclass, field

DEFAULT_MAX_RESULTS = 5
MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 10

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 500

# How many catalog records are fetched before ranking trims to max_results.
CATALOG_FAN_OUT = 20

GEMINI_API_KEY_ENV = "GEMINI_API_KEY"


def _api_key_from_env() -> str:
    return os.environ.get(GEMINI_API_KEY_ENV, "")


@dataclass
class GeminiSettings:
    """Connection settings for the Gemini generateContent API."""

    api_key: str = field(default_factory=_api_key_from_env)
    model: str = "gemini-1.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = 0.1
    max_output_tokens: int = 256

    @property
    def generate_url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"


@dataclass
class OpenLibrarySettings:
    """Connection settings for the Open Library search API."""

    base_url: str = "https://openlibrary.org"
    timeout_seconds: float = 30.0
    min_request_interval: float = 0.1
    max_retries: int = 3
