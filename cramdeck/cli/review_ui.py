"""
Interactive terminal loop for reviewing and browsing a deck.
"""

import logging
from typing import Dict

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from cramdeck.models import ClozeCard, Grade, SessionMode
from cramdeck.renderer import card_face
from cramdeck.review_manager import ReviewSessionManager

logger = logging.getLogger(__name__)
console = Console()

KEY_GRADES: Dict[str, Grade] = {
    "1": Grade.AGAIN,
    "2": Grade.HARD,
    "3": Grade.GOOD,
    "4": Grade.EASY,
}

PROMPT = (
    "[bold]Enter[/bold]=flip · [bold]1-4[/bold]=again/hard/good/easy · "
    "[bold]n/p[/bold]=next/prev · [bold]s[/bold]=shuffle · "
    "[bold]r[/bold]=reset · [bold]m[/bold]=mode · [bold]q[/bold]=quit: "
)


def _status_line(manager: ReviewSessionManager) -> str:
    """
    "Due: N · P%" in review mode, "Card i/n · P%" in browse mode.
    """
    if manager.mode is SessionMode.REVIEW:
        where = f"Due: {manager.due_count()}"
    else:
        where = f"Card {manager.position + 1}/{manager.total}"
    return f"{where} · {manager.progress()}%"


def _display_active_card(manager: ReviewSessionManager) -> None:
    """Print the active card, or why there is none."""
    card = manager.active_card()
    if card is None:
        if manager.total == 0:
            console.print("[bold yellow]The deck is empty.[/bold yellow]")
        else:
            console.print(
                "[bold green]All caught up! No cards are due.[/bold green]"
            )
        return

    if isinstance(card, ClozeCard):
        title = "Cloze"
    else:
        title = "Back" if manager.revealed else "Front"
    border = "blue" if manager.revealed else "green"
    console.print(
        Panel(
            Text(card_face(card, manager.revealed)),
            title=f"#{card.id} {title}",
            border_style=border,
        )
    )


def handle_command(manager: ReviewSessionManager, command: str) -> bool:
    """
    Apply one user command to the session.

    Returns:
        bool: False when the user asked to quit, True otherwise.
    """
    command = command.strip().lower()
    if command in ("q", "quit"):
        return False
    if command in ("", "f", "flip"):
        manager.flip()
    elif command in KEY_GRADES:
        updated = manager.grade(KEY_GRADES[command])
        if updated is not None:
            minutes = updated.srs.interval / 60000
            console.print(
                f"[green]Graded {KEY_GRADES[command].value}.[/green] "
                f"Next due in [bold]{minutes:.0f} min[/bold]."
            )
    elif command in ("n", "next"):
        manager.next()
    elif command in ("p", "prev"):
        manager.prev()
    elif command in ("s", "shuffle"):
        manager.shuffle()
        console.print("[cyan]Deck shuffled.[/cyan]")
    elif command in ("r", "reset"):
        manager.reset_progress()
        console.print("[cyan]Progress reset.[/cyan]")
    elif command in ("m", "mode"):
        manager.toggle_mode()
        console.print(f"[cyan]Mode: {manager.mode.value}[/cyan]")
    else:
        logger.debug(f"Unknown session command {command!r}")
        console.print(f"[bold red]Unknown command: {escape(command)}[/bold red]")
    return True


def start_review_flow(manager: ReviewSessionManager) -> None:
    """
    Run the interactive loop until the user quits or input ends.

    Args:
        manager: An instance of ReviewSessionManager.
    """
    console.print(
        f"[bold cyan]Starting {manager.mode.value} session "
        f"({manager.total} cards)...[/bold cyan]"
    )
    while True:
        console.rule(_status_line(manager))
        _display_active_card(manager)
        try:
            command = console.input(PROMPT)
        except EOFError:
            break
        if not handle_command(manager, command):
            break

    console.print("[bold cyan]Session finished. Well done![/bold cyan]")
