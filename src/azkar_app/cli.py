#!filepath: src/azkar_app/cli.py
from __future__ import annotations

import typer
from rich import print
from rich.table import Table

from azkar_app.categories import CANONICAL_CATEGORIES
from azkar_app.errors import QuranApiError
from azkar_app.lookup import find_category_entries, is_unbounded, search_entries, target_count
from azkar_app.models import CanonicalDataset, CanonicalEntry
from azkar_app.quran import QuranClient, display_arabic_name, surah_audio_url
from azkar_app.repository import build_repository
from azkar_app.settings import SettingsError, get_settings
from azkar_app.utils.logger import get_logger

app = typer.Typer(help="Remembrance content: fetch, cache and browse adhkar.")
logger = get_logger(__name__)


def _acquire(refresh: bool = False) -> CanonicalDataset:
    try:
        repo = build_repository()
    except SettingsError as e:
        logger.error(f"Invalid settings: {e}")
        raise typer.Exit(code=2) from e
    return repo.refresh() if refresh else repo.acquire()


def _print_categories(dataset: CanonicalDataset) -> None:
    table = Table(title="Categories")
    table.add_column("Category")
    table.add_column("Entries", justify="right")
    ordered = [c for c in CANONICAL_CATEGORIES if c in dataset]
    ordered += [c for c in dataset if c not in CANONICAL_CATEGORIES]
    for name in ordered:
        table.add_row(name, str(len(dataset[name])))
    print(table)


def _print_entries(entries: list[CanonicalEntry]) -> None:
    for i, e in enumerate(entries, start=1):
        times = "∞" if is_unbounded(e) else str(target_count(e))
        print(f"[bold]{i}.[/bold] {e.text}  [dim]x{times}[/dim]")
        if e.description:
            print(f"   [green]{e.description}[/green]")
        if e.reference:
            print(f"   [dim]{e.reference}[/dim]")


@app.command()
def categories() -> None:
    """List available categories with entry counts."""
    _print_categories(_acquire())


@app.command()
def refresh() -> None:
    """Drop the cached snapshot and fetch again."""
    _print_categories(_acquire(refresh=True))


@app.command()
def show(label: str = typer.Argument(..., help="Category label")) -> None:
    """Print the entries of one category."""
    entries = find_category_entries(_acquire(), label)
    if not entries:
        print(f"[yellow]Content for {label!r} is currently unavailable.[/yellow]")
        raise typer.Exit(code=1)
    _print_entries(entries)


@app.command()
def search(query: str = typer.Argument(..., help="Text to look for")) -> None:
    """Search entry text and descriptions."""
    results = search_entries(_acquire(), query)
    if not results:
        print("[yellow]No results.[/yellow]")
        raise typer.Exit(code=1)
    _print_entries(results)


@app.command()
def surah(number: int = typer.Argument(..., help="Surah number, 1 to 114")) -> None:
    """Show a chapter name, verse count and recitation audio URL."""
    if not 1 <= number <= 114:
        print("[red]Surah number must be between 1 and 114.[/red]")
        raise typer.Exit(code=2)

    cfg = get_settings().app.quran
    client = QuranClient(base_url=cfg.base_url)
    try:
        chapters = client.chapters()
    except QuranApiError as e:
        logger.error(f"Failed to load chapters: {e}")
        raise typer.Exit(code=1) from e

    chapter = next((c for c in chapters if int(c.get("id") or 0) == number), None)
    if chapter is None:
        print(f"[yellow]Chapter {number} is currently unavailable.[/yellow]")
        raise typer.Exit(code=1)

    print(f"[bold]{display_arabic_name(chapter)}[/bold]")
    print(f"Verses: {chapter.get('verses_count', '?')}")
    print(f"Audio: {surah_audio_url(number, base_url=cfg.audio_base_url)}")


if __name__ == "__main__":
    app()
