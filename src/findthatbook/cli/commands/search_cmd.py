# ABOUTME: The `findthatbook search` command for finding a book from a vague description.
# ABOUTME: Extracts an intent, searches Open Library, and prints ranked, explained candidates.

import json
import logging

import click
from rich.console import Console
from rich.table import Table

from findthatbook.cli.options import api_key_option, max_results_option
from findthatbook.config import GeminiSettings, OpenLibrarySettings
from findthatbook.core.search import BookSearch, SearchRequest, SearchResponse
from findthatbook.errors import FindThatBookError, ValidationError
from findthatbook.matching.types import MatchStrength, SearchIntent
from findthatbook.sources.fallback import FallbackIntentExtractor
from findthatbook.sources.gemini import GeminiIntentExtractor
from findthatbook.sources.http import FindThatBookHttpClient
from findthatbook.sources.openlibrary import OpenLibrarySearch, query_summary
from findthatbook.sources.provider import CatalogSearch, IntentExtractor

logger = logging.getLogger(__name__)

_STRENGTH_STYLES = {
    MatchStrength.EXACT: "bold green",
    MatchStrength.STRONG: "green",
    MatchStrength.PARTIAL: "yellow",
    MatchStrength.WEAK: "dim",
}


def _create_catalog() -> CatalogSearch:
    """Create the default catalog search (Open Library)."""
    settings = OpenLibrarySettings()
    http_client = FindThatBookHttpClient(
        min_request_interval=settings.min_request_interval,
        max_retries=settings.max_retries,
        timeout=settings.timeout_seconds,
    )
    return OpenLibrarySearch(http_client=http_client, settings=settings)


def _create_extractor(api_key: str | None, offline: bool) -> IntentExtractor:
    """Create the intent extractor: Gemini, or the local fallback when offline."""
    if offline:
        return FallbackIntentExtractor()
    settings = GeminiSettings() if api_key is None else GeminiSettings(api_key=api_key)
    return GeminiIntentExtractor(http_client=FindThatBookHttpClient(), settings=settings)


def _render_table(console: Console, response: SearchResponse) -> None:
    intent = response.intent
    console.print(f"[bold]Query:[/bold] {response.original_query}")
    console.print(f"  [dim]Understood as:[/dim] {query_summary(intent)}")

    if not response.candidates:
        console.print("[yellow]No matching books found.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="bold", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("Match")
    table.add_column("Score", justify="right")
    table.add_column("Why")

    for i, candidate in enumerate(response.candidates, start=1):
        record = candidate.record
        style = _STRENGTH_STYLES.get(candidate.match_strength, "")
        table.add_row(
            str(i),
            record.title,
            record.author or "[dim]unknown[/dim]",
            str(record.first_publish_year) if record.first_publish_year else "?",
            f"[{style}]{candidate.match_strength.label}[/{style}]",
            f"{candidate.match_score:.2f}",
            "; ".join(candidate.match_reasons),
        )

    console.print(table)
    console.print(
        f"\n[dim]{response.total_candidates} result(s) in {response.processing_time:.2f}s[/dim]"
    )


@click.command("search")
@click.argument("query")
@max_results_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as JSON.")
@api_key_option
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Skip the AI extractor and treat query words as keywords.",
)
@click.option("--title", default=None, help="Known title; skips AI extraction.")
@click.option("--author", default=None, help="Known author; skips AI extraction.")
@click.option("--year", type=int, default=None, help="Known publication year.")
@click.option(
    "-k", "--keyword", "keywords", multiple=True, help="Descriptive keyword (repeatable)."
)
def search(
    query: str,
    max_results: int,
    as_json: bool,
    api_key: str | None,
    offline: bool,
    title: str | None,
    author: str | None,
    year: int | None,
    keywords: tuple[str, ...],
) -> None:
    """Find books matching a loosely remembered QUERY."""
    console = Console()
    request = SearchRequest(query=query, max_results=max_results)
    has_overrides = bool(title or author or year is not None or keywords)

    book_search = BookSearch(
        extractor=_create_extractor(api_key, offline or has_overrides),
        catalog=_create_catalog(),
    )

    try:
        if has_overrides:
            request.validate()
            intent = SearchIntent(
                title=title,
                author=author,
                year=year,
                keywords=keywords,
                original_query=query,
            )
            response = book_search.execute_intent(intent, max_results)
        else:
            response = book_search.execute(request)
    except ValidationError as exc:
        raise click.UsageError(exc.message) from exc
    except FindThatBookError as exc:
        logger.debug("Search failed with %s", exc.error_code, exc_info=True)
        console.print(f"[red]Error:[/red] {exc.message}")
        raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2))
        return

    _render_table(console, response)
