"""
Tests for the plain-text deck parser in cramdeck.parser.
"""

import pytest

from cramdeck.constants import DEFAULT_DECK, DEFAULT_EASE, NO_BACK_SENTINEL
from cramdeck.models import BasicCard, ClozeCard
from cramdeck.parser import parse_deck, parse_line, split_front_back

NOW = 1_704_103_200_000


def test_basic_pipe_card():
    cards = parse_deck("Front | Back", now=NOW)
    assert len(cards) == 1
    card = cards[0]
    assert isinstance(card, BasicCard)
    assert card.id == 1
    assert card.front == "Front"
    assert card.back == "Back"


def test_cloze_card_kept_verbatim():
    cards = parse_deck("  {{c1::Hidden}} shown  ", now=NOW)
    assert len(cards) == 1
    assert isinstance(cards[0], ClozeCard)
    assert cards[0].text == "{{c1::Hidden}} shown"


@pytest.mark.parametrize(
    "line, front, back",
    [
        ("Front | Back", "Front", "Back"),
        ("Front||| Back", "Front", "Back"),
        ("Left :: Right", "Left", "Right"),
        ("Foo\tBar", "Foo", "Bar"),
        ("Alpha — Beta", "Alpha", "Beta"),
        ("Alpha—Beta", "Alpha", "Beta"),
        ("Gamma - Delta", "Gamma", "Delta"),
    ],
)
def test_every_separator(line, front, back):
    (card,) = parse_deck(line, now=NOW)
    assert (card.front, card.back) == (front, back)


def test_earliest_separator_wins():
    (card,) = parse_deck("a :: b | c", now=NOW)
    assert card.front == "a"
    assert card.back == "b | c"

    (card,) = parse_deck("x - y :: z", now=NOW)
    assert card.front == "x"
    assert card.back == "y :: z"


@pytest.mark.parametrize(
    "line",
    ["Foo\t - Bar", "Foo\t—Bar", "Foo \t - Bar", "Foo\t\t:: Bar", "Foo \t| Bar"],
)
def test_whitespace_before_separator_is_absorbed(line):
    # A tab directly ahead of another separator is part of its padding.
    (card,) = parse_deck(line, now=NOW)
    assert (card.front, card.back) == ("Foo", "Bar")


def test_split_front_back_tab_then_dash():
    assert split_front_back("Foo\t - Bar") == ("Foo", "Bar")
    assert split_front_back("Foo\tBar - Baz") == ("Foo", "Bar - Baz")


def test_hyphen_without_spaces_is_not_a_separator():
    (card,) = parse_deck("well-known fact", now=NOW)
    assert card.front == "well-known fact"
    assert card.back == NO_BACK_SENTINEL


def test_single_colon_is_not_a_separator():
    (card,) = parse_deck("Ratio: 3 to 1", now=NOW)
    assert card.back == NO_BACK_SENTINEL


def test_line_without_separator_gets_sentinel_back():
    (card,) = parse_deck("Just a question", now=NOW)
    assert isinstance(card, BasicCard)
    assert card.front == "Just a question"
    assert card.back == NO_BACK_SENTINEL


def test_empty_back_is_kept_empty():
    (card,) = parse_deck("Front |", now=NOW)
    assert card.front == "Front"
    assert card.back == ""


@pytest.mark.parametrize("line", ["| Back only", "|", ":: x", "\t"])
def test_leading_separator_degrades_to_whole_line_front(line):
    cards = parse_deck(line, now=NOW)
    if not line.strip():
        assert cards == []
        return
    (card,) = cards
    assert card.front == line.strip()
    assert card.back == NO_BACK_SENTINEL


def test_cloze_detection_takes_precedence_over_separators():
    (card,) = parse_deck("Oxidation | {{c1::Loss of electrons}}", now=NOW)
    assert isinstance(card, ClozeCard)
    assert card.text == "Oxidation | {{c1::Loss of electrons}}"


def test_malformed_cloze_still_cloze():
    (card,) = parse_deck("{{cx broken", now=NOW)
    assert isinstance(card, ClozeCard)


def test_blank_lines_dropped_and_ids_contiguous():
    text = "\nA | a\n\n   \r\nB | b\r\n{{c1::C}}\n\n"
    cards = parse_deck(text, now=NOW)
    assert [c.id for c in cards] == [1, 2, 3]
    assert cards[0].front == "A"
    assert cards[1].front == "B"


@pytest.mark.parametrize("text", ["", "   ", "\n\n\r\n"])
def test_empty_input_yields_empty_deck(text):
    assert parse_deck(text, now=NOW) == []


def test_initial_scheduling_state():
    cards = parse_deck("A | a\n{{c1::b}}", now=NOW)
    for card in cards:
        assert card.srs.ease == DEFAULT_EASE
        assert card.srs.interval == 0
        assert card.srs.reps == 0
        assert card.srs.lapses == 0
        assert card.srs.due == NOW


@pytest.mark.parametrize(
    "text",
    [
        "Front | Back\n{{c1::Hidden}} shown\nLeft :: Right\nFoo\tBar\nAlpha — Beta\nGamma - Delta",
        "|||\n::\n—\n - \n{{\n}}\n{{c1::}}",
        "ünïcødé | ☃\n\x00 weird \x01\nno separator here",
        DEFAULT_DECK,
    ],
)
def test_parsing_is_total(text):
    non_blank = [ln for ln in text.splitlines() if ln.strip()]
    cards = parse_deck(text, now=NOW)
    assert len(cards) == len(non_blank)
    assert [c.id for c in cards] == list(range(1, len(non_blank) + 1))


def test_default_deck_parses():
    cards = parse_deck(DEFAULT_DECK, now=NOW)
    assert len(cards) == 9
    assert isinstance(cards[0], BasicCard)
    assert cards[0].front == "Acid + Base"
    assert cards[0].back == "Salt + Water"
    assert isinstance(cards[2], ClozeCard)


def test_parse_line_blank_returns_none():
    assert parse_line("   ", 1, NOW) is None


def test_split_front_back_none_without_separator():
    assert split_front_back("nothing to split") is None
