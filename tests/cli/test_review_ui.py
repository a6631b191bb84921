"""
Unit tests for the cramdeck.cli.review_ui module.
"""

import random
from unittest.mock import MagicMock, patch

import pytest

from cramdeck.constants import HOUR_MS
from cramdeck.models import Grade, SessionMode
from cramdeck.cli.review_ui import handle_command, start_review_flow
from cramdeck.review_manager import ReviewSessionManager


@pytest.fixture
def manager(clock, mixed_deck) -> ReviewSessionManager:
    """Provides a manager over the mixed deck (cards 2 then 1 are due)."""
    return ReviewSessionManager(
        clock=clock, rng=random.Random(3), cards=mixed_deck
    )


@pytest.fixture
def mock_manager() -> MagicMock:
    """Provides a mock ReviewSessionManager."""
    return MagicMock(spec=ReviewSessionManager)


# --- handle_command ---


@pytest.mark.parametrize("command", ["q", "quit", " Q "])
def test_quit_commands(mock_manager: MagicMock, command):
    assert handle_command(mock_manager, command) is False


@pytest.mark.parametrize("command", ["", "f", "flip"])
def test_flip_commands(mock_manager: MagicMock, command):
    assert handle_command(mock_manager, command) is True
    mock_manager.flip.assert_called_once()


@pytest.mark.parametrize(
    "key, grade",
    [("1", Grade.AGAIN), ("2", Grade.HARD), ("3", Grade.GOOD), ("4", Grade.EASY)],
)
def test_number_keys_grade(mock_manager: MagicMock, key, grade):
    mock_manager.grade.return_value = None
    handle_command(mock_manager, key)
    mock_manager.grade.assert_called_once_with(grade)


@pytest.mark.parametrize(
    "command, method",
    [
        ("n", "next"),
        ("next", "next"),
        ("p", "prev"),
        ("s", "shuffle"),
        ("r", "reset_progress"),
        ("m", "toggle_mode"),
    ],
)
def test_session_commands(mock_manager: MagicMock, command, method):
    mock_manager.mode = SessionMode.REVIEW
    assert handle_command(mock_manager, command) is True
    getattr(mock_manager, method).assert_called_once()


def test_unknown_command_is_reported(mock_manager: MagicMock, capsys):
    assert handle_command(mock_manager, "[zap]") is True
    assert "Unknown command: [zap]" in capsys.readouterr().out
    mock_manager.grade.assert_not_called()


def test_grade_prints_next_due(manager, capsys):
    handle_command(manager, "")
    assert handle_command(manager, "3") is True
    output = capsys.readouterr().out
    assert "Graded good." in output
    assert "Next due in 480 min" in output
    assert manager.deck[1].srs.interval == 8 * HOUR_MS


def test_grade_key_before_reveal_only_reveals(manager, capsys):
    handle_command(manager, "4")
    assert manager.revealed
    assert "Graded" not in capsys.readouterr().out
    assert all(card.srs.reps == 0 for card in manager.deck)


def test_mode_command_reports_mode(manager, capsys):
    handle_command(manager, "m")
    assert manager.mode is SessionMode.BROWSE
    assert "Mode: browse" in capsys.readouterr().out


# --- start_review_flow ---


def test_flow_shows_front_then_back(manager, capsys):
    with patch("rich.console.Console.input", side_effect=["", "q"]):
        start_review_flow(manager)

    output = capsys.readouterr().out
    assert "Starting review session (3 cards)..." in output
    assert "Due: 2" in output
    assert "____ is second" in output
    assert "B is second" in output
    assert "Session finished. Well done!" in output


def test_flow_reaches_caught_up(manager, capsys):
    with patch(
        "rich.console.Console.input", side_effect=["", "3", "", "2", "q"]
    ):
        start_review_flow(manager)

    output = capsys.readouterr().out
    assert "All caught up! No cards are due." in output
    assert "Due: 0" in output
    assert manager.is_caught_up()


def test_flow_stops_on_eof(manager, capsys):
    with patch("rich.console.Console.input", side_effect=EOFError):
        start_review_flow(manager)

    assert "Session finished." in capsys.readouterr().out


def test_flow_on_empty_deck(clock, capsys):
    manager = ReviewSessionManager(clock=clock)
    with patch("rich.console.Console.input", side_effect=["1", "q"]):
        start_review_flow(manager)

    output = capsys.readouterr().out
    assert "The deck is empty." in output
    assert not manager.revealed


def test_browse_flow_shows_position(manager, capsys):
    manager.set_mode(SessionMode.BROWSE)
    with patch("rich.console.Console.input", side_effect=["n", "n", "q"]):
        start_review_flow(manager)

    output = capsys.readouterr().out
    assert "Starting browse session" in output
    assert "Card 1/3" in output
    assert "Card 3/3" in output
    assert "#3 Front" in output
