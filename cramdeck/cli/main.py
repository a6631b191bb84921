"""
CLI entry point for cramdeck.
"""

# Standard library imports
from pathlib import Path
from typing import Optional

# Third-party imports
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

# Local application imports
from cramdeck.config import settings
from cramdeck.db.database import DeckStore
from cramdeck.exceptions import DatabaseError
from cramdeck.models import SessionMode
from cramdeck.renderer import card_face
from cramdeck.review_manager import ReviewSessionManager
from cramdeck.cli.review_ui import start_review_flow


console = Console()

app = typer.Typer(
    name="cramdeck",
    help="cramdeck: flashcards with a 10-day cram scheduler.",
    add_completion=False,
    rich_markup_mode="markdown",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_db_path(db: Optional[Path]) -> Path:
    """Resolve db path from the CLI flag (or CRAMDECK_DB), else settings."""
    if db is not None:
        return db
    return settings.db_path


_db_option = typer.Option(  # noqa: B008
    None,
    "--db",
    help="Path to the DuckDB database file. "
    "Falls back to CRAMDECK_DB, then CRAMDECK_DB_PATH.",
    envvar="CRAMDECK_DB",
)


def _format_duration(ms: float) -> str:
    """Compact human form of a duration: 45s, 20m, 8.0h, 2.3d."""
    seconds = ms / 1000
    if abs(seconds) < 60:
        return f"{seconds:.0f}s"
    minutes = seconds / 60
    if abs(minutes) < 60:
        return f"{minutes:.0f}m"
    hours = minutes / 60
    if abs(hours) < 24:
        return f"{hours:.1f}h"
    return f"{hours / 24:.1f}d"


def _open_session(
    store: DeckStore,
    mode: SessionMode = SessionMode.REVIEW,
    persist: bool = True,
) -> ReviewSessionManager:
    return ReviewSessionManager.from_store(store, persist=persist, mode=mode)


def _fail(message: str, error: Exception) -> None:
    console.print(f"[bold red]{message}:[/bold red] {error}")
    raise typer.Exit(code=1) from error


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


@app.command()
def load(
    file: Optional[Path] = typer.Argument(  # noqa: B008
        None,
        help="Text file with one card per line.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    text: Optional[str] = typer.Option(
        None,
        "--text",
        help="Deck text given inline instead of a file.",
    ),
    db: Optional[Path] = _db_option,
):
    """
    Parse a deck and save it, replacing the saved deck and all its progress.

    Lines are either `Front | Back` (also `::`, tab, `—` or ` - `) or cloze
    text like `{{c1::hidden}} rest`.
    """
    if file is None and text is None:
        console.print(
            "[bold red]Error: give a deck FILE or --text.[/bold red]"
        )
        raise typer.Exit(code=1)

    if text is None:
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _fail("Could not read deck file", e)

    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            manager = ReviewSessionManager(store=store)
            manager.load_deck(text)
    except DatabaseError as e:
        _fail("Database Error", e)

    console.print(
        f"[bold green]Loaded {manager.total} cards.[/bold green] "
        f"All are due now."
    )


# ---------------------------------------------------------------------------
# Review / browse
# ---------------------------------------------------------------------------


@app.command()
def review(db: Optional[Path] = _db_option):
    """Review due cards, earliest due first."""
    _run_interactive(db, SessionMode.REVIEW)


@app.command()
def browse(db: Optional[Path] = _db_option):
    """Walk through the whole deck in order."""
    _run_interactive(db, SessionMode.BROWSE)


def _run_interactive(db: Optional[Path], mode: SessionMode) -> None:
    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            manager = _open_session(store, mode)
            start_review_flow(manager)
    except DatabaseError as e:
        _fail("A database error occurred", e)


# ---------------------------------------------------------------------------
# Stats / list
# ---------------------------------------------------------------------------


@app.command()
def stats(db: Optional[Path] = _db_option):
    """Display deck statistics. Reads the store without writing to it."""
    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            manager = _open_session(store, persist=False)
            stats_data = manager.stats()
    except DatabaseError as e:
        _fail("A database error occurred", e)

    table = Table(title="Deck Stats", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Total Cards", str(stats_data["total_cards"]))
    table.add_row("Due Now", str(stats_data["due_cards"]))
    table.add_row("Progress", f"{stats_data['progress']}%")
    table.add_row("Reviews", str(stats_data["total_reps"]))
    table.add_row("Lapses", str(stats_data["total_lapses"]))
    console.print(table)

    if not stats_data["total_cards"]:
        console.print("[yellow]No cards in the deck.[/yellow]")


@app.command("list")
def list_cards(db: Optional[Path] = _db_option):
    """List every card in deck order with its schedule. Read-only."""
    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            manager = _open_session(store, persist=False)
            now = manager.clock()
            cards = list(manager.deck)
    except DatabaseError as e:
        _fail("A database error occurred", e)

    table = Table(title="Cards")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Type")
    table.add_column("Card")
    table.add_column("Due In", style="yellow")
    table.add_column("Interval")
    table.add_column("Ease", style="magenta")
    table.add_column("Reps/Lapses")
    for card in cards:
        due_in = card.srs.due - now
        table.add_row(
            str(card.id),
            card.type,
            Text(card_face(card, revealed=False)),
            "now" if due_in <= 0 else _format_duration(due_in),
            _format_duration(card.srs.interval),
            f"{card.srs.ease:.2f}",
            f"{card.srs.reps}/{card.srs.lapses}",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Shuffle / reset
# ---------------------------------------------------------------------------


@app.command()
def shuffle(db: Optional[Path] = _db_option):
    """Shuffle the saved deck order. Progress is kept."""
    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            _open_session(store).shuffle()
    except DatabaseError as e:
        _fail("A database error occurred", e)
    console.print("[bold green]Deck shuffled.[/bold green]")


@app.command()
def reset(
    db: Optional[Path] = _db_option,
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Bypass confirmation prompt."
    ),
):
    """Reset all scheduling progress; every card becomes due now."""
    if not yes:
        confirmed = typer.confirm(
            "Are you sure you want to reset progress for every card?"
        )
        if not confirmed:
            console.print("Reset cancelled.")
            raise typer.Exit()

    db_path = _resolve_db_path(db)
    try:
        with DeckStore(db_path) as store:
            _open_session(store).reset_progress()
    except DatabaseError as e:
        _fail("A database error occurred", e)
    console.print("[bold green]Progress reset.[/bold green]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application, exiting with status 1 on unexpected errors.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
