"""
CLI Main - Typer-based command-line interface.

Usage:
    hitmerge formula settings.json
    hitmerge merge settings.json products.json archive.json --output merged.json
    hitmerge search "drill" --index products --index archive
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from hitmerge.config import HitMergeError, InvalidResultsError, get_settings
from hitmerge.domains.ranking import RankingCriterion, RankingFormula, ResultMerger

app = typer.Typer(
    name="hitmerge",
    help="hitmerge - Ranking-aware merging of search results",
    add_completion=False,
)
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


@app.command()
def formula(
    settings_path: Path = typer.Argument(..., help="Index settings JSON file"),
) -> None:
    """Show the ranking formula described by index settings."""
    try:
        parsed = RankingFormula.parse(_read_json(settings_path))
    except HitMergeError as e:
        _fail(e)

    table = Table(title="Ranking Formula")
    table.add_column("#", style="dim")
    table.add_column("Criterion", style="cyan")
    table.add_column("Direction", style="green")

    for position, criterion in enumerate(parsed.criteria, 1):
        if criterion is RankingCriterion.CUSTOM:
            table.add_row(str(position), "custom", "")
            for sort in parsed.custom_ranking:
                table.add_row("", f"  {sort.attribute}", sort.direction.value)
        else:
            table.add_row(str(position), criterion.value, criterion.direction.value)

    console.print(table)
    if parsed.custom_ranking and not parsed.uses_custom_ranking:
        console.print(
            "[yellow]Custom ranking is set but `custom` is not in the ranking.[/yellow]"
        )


@app.command()
def merge(
    settings_path: Path = typer.Argument(..., help="Index settings JSON file"),
    results_paths: list[Path] = typer.Argument(..., help="Sorted hit lists or search responses"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON path"),
) -> None:
    """Merge sorted result files into one list."""
    try:
        merger = ResultMerger.from_settings(_read_json(settings_path))
        hit_lists = [_load_hits(path) for path in results_paths]
        merged = merger.merge_all(hit_lists)
    except HitMergeError as e:
        _fail(e)

    if output:
        output.write_text(json.dumps(merged, indent=2))
        console.print(f"[green]Merged {len(merged)} hits into:[/green] {output}")
        return

    _print_hits(merged, title=f"Merged Hits ({sum(map(len, hit_lists))} in, {len(merged)} out)")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    indices: list[str] = typer.Option(..., "--index", "-i", help="Index to query (repeatable)"),
    limit: int = typer.Option(10, "--limit", "-n", help="Hits per index"),
) -> None:
    """Search several indices and merge the hits by ranking."""
    asyncio.run(_search_async(query, indices, limit))


async def _search_async(query: str, indices: list[str], limit: int) -> None:
    """Async search implementation."""
    from hitmerge.adapters.algolia import AlgoliaClient
    from hitmerge.domains.federation import FederatedSearch

    settings = get_settings()
    if not settings.app_id or not settings.api_key:
        console.print("[red]Error:[/red] Set HITMERGE_APP_ID and HITMERGE_API_KEY")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Searching {len(indices)} indices...", total=None)

        async with AlgoliaClient.from_settings(settings) as client:
            try:
                results = await FederatedSearch(client, indices).search(
                    query, hitsPerPage=limit
                )
            except HitMergeError as e:
                _fail(e)

    _print_hits(results.hits, title=f'"{query}" - {results.nb_hits} hits')
    console.print(f"[dim]Processing time: {results.processing_time_ms} ms[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    from hitmerge import __version__

    console.print(f"hitmerge v{__version__}")


def _read_json(path: Path) -> Any:
    """Read a JSON file, exiting on I/O or syntax errors."""
    try:
        return json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {e}")
        raise typer.Exit(1)


def _load_hits(path: Path) -> list[dict[str, Any]]:
    """Hits from a file holding either a hit list or a search response."""
    from hitmerge.domains.results import SearchResults

    data = _read_json(path)
    if isinstance(data, list):
        if not all(isinstance(hit, dict) for hit in data):
            raise InvalidResultsError(
                f"Every hit must be a JSON object: {path}",
                {"path": str(path)},
            )
        return data
    return SearchResults.decode(data).hits


def _print_hits(hits: list[dict[str, Any]], title: str) -> None:
    table = Table(title=title)
    table.add_column("#", style="dim")
    table.add_column("objectID", style="cyan")
    table.add_column("Typos")
    table.add_column("Words")

    for position, hit in enumerate(hits, 1):
        info = hit.get("_rankingInfo") or {}
        table.add_row(
            str(position),
            str(hit.get("objectID", "")),
            str(info.get("nbTypos", "")),
            str(info.get("words", "")),
        )

    console.print(table)


def _fail(error: HitMergeError) -> NoReturn:
    console.print(f"[red]Error:[/red] {error.message}")
    raise typer.Exit(1)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
