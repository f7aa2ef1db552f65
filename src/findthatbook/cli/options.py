# ABOUTME: Shared Click options for FindThatBook CLI commands.
# ABOUTME: Provides reusable decorators for the result limit and the Gemini API key.

import click

from findthatbook.config import (
    DEFAULT_MAX_RESULTS,
    GEMINI_API_KEY_ENV,
    MAX_MAX_RESULTS,
    MIN_MAX_RESULTS,
)

max_results_option = click.option(
    "-n",
    "--max-results",
    type=click.IntRange(MIN_MAX_RESULTS, MAX_MAX_RESULTS),
    default=DEFAULT_MAX_RESULTS,
    show_default=True,
    help="Maximum number of candidates to show.",
)

api_key_option = click.option(
    "--api-key",
    envvar=GEMINI_API_KEY_ENV,
    default=None,
    help=f"Gemini API key (default: ${GEMINI_API_KEY_ENV}).",
)
