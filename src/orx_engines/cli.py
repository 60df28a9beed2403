import logging
from pathlib import Path
from typing import cast

import typer  # type: ignore
from rich.console import Console  # type: ignore
from rich.table import Table  # type: ignore

from orx_engines.base import Engine, ResultSet, SearchOptions, TimeRange
from orx_engines.config import Settings
from orx_engines.errors import EngineError, EngineNotFoundError
from orx_engines.loader import default_registry
from orx_engines.runner import run_search
from orx_engines.transport import HttpTransport

app = typer.Typer(help="orx-engines search engine adapters CLI")
console = Console()


@app.callback()
def main() -> None:
    """Configure logging from the environment before any command runs."""
    try:
        settings = Settings.from_env()
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e
    logging.basicConfig(level=settings.log_level)


@app.command("list")
def list_commands() -> None:
    """List registered engines and their categories."""
    registry = default_registry()
    if not registry.names():
        console.print("[yellow]No engines found.[/yellow]")
        return

    table = Table(title="Available Engines")
    table.add_column("Name", style="cyan")
    table.add_column("Categories", style="green")
    table.add_column("Class", style="white")

    for name in registry.names():
        engine = registry.get(name)
        table.add_row(
            name, ", ".join(registry.categories_of(name)), type(engine).__name__
        )

    console.print(table)


@app.command("url")
def url(
    engine_name: str = typer.Argument(..., help="Engine name (e.g., bing_videos)"),
    query: str = typer.Argument(..., help="Search query"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    time_range: str = typer.Option(
        "", "--time-range", "-t", help="day, week, month or year"
    ),
) -> None:
    """Print the provider URL an engine would fetch."""
    engine = _get_engine(engine_name)
    options = _build_options(query, page, time_range)
    engine.request(options)
    console.print(options.url, soft_wrap=True)


@app.command("parse")
def parse(
    engine_name: str = typer.Argument(..., help="Engine name (e.g., bing_videos)"),
    path: Path = typer.Argument(..., help="Saved provider response", exists=True),
    query: str = typer.Argument(..., help="Query the response was fetched for"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
) -> None:
    """Parse a provider response saved to disk."""
    engine = _get_engine(engine_name)
    options = _build_options(query, page, "")
    try:
        results = engine.response(options, path.read_bytes())
    except EngineError as e:
        console.print(f"[red]Parse failed:[/red] {e}")
        raise typer.Exit(code=1) from e

    _print_results(query, results)


@app.command("search")
def search(
    engine_name: str = typer.Argument(..., help="Engine name (e.g., bing_videos)"),
    query: str = typer.Argument(..., help="Search query"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    time_range: str = typer.Option(
        "", "--time-range", "-t", help="day, week, month or year"
    ),
) -> None:
    """Fetch and parse one page of results from an engine."""
    engine = _get_engine(engine_name)
    options = _build_options(query, page, time_range)

    with (
        HttpTransport.from_settings(Settings.from_env()) as transport,
        console.status(f"Searching {engine_name} for '{query}'..."),
    ):
        try:
            results = run_search(engine, options, transport.fetch)
        except EngineError as e:
            console.print(f"[red]Search failed:[/red] {e}")
            raise typer.Exit(code=1) from e

    _print_results(query, results)


def _get_engine(name: str) -> Engine:
    registry = default_registry()
    try:
        return registry.get(name)
    except EngineNotFoundError:
        console.print(f"[red]Error:[/red] Engine '{name}' not found.")
        console.print(f"Available: {', '.join(registry.names())}")
        raise typer.Exit(code=1) from None


def _build_options(query: str, page: int, time_range: str) -> SearchOptions:
    try:
        return SearchOptions(
            query=query, page_no=page, time_range=cast(TimeRange, time_range)
        )
    except EngineError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


def _print_results(query: str, results: ResultSet) -> None:
    if not len(results):
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table(title=f"Results for '{query}' ({len(results)})")
    table.add_column("Title", style="bold cyan")
    table.add_column("Content", style="white")
    table.add_column("URL", style="blue underline")

    for item in results:
        content = item.content
        if len(content) > 200:
            content = content[:200] + "..."
        table.add_row(item.title, content, item.url)

    console.print(table)


if __name__ == "__main__":
    app()
