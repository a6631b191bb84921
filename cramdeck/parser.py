"""
Parses plain-text decks, one card per line.

Supported line formats:
  - Basic:  ``Front | Back`` (also ``::``, tab, em-dash or `` - `` separators)
  - Cloze:  ``{{c1::hidden text}} rest of sentence``
"""

import logging
import re
from typing import List, Optional, Tuple

from .constants import NO_BACK_SENTINEL
from .models import BasicCard, Card, ClozeCard, SchedulingState, now_ms

logger = logging.getLogger(__name__)

CLOZE_MARKER = "{{c"

# Front is the shortest prefix followed by a separator: a run of "|", "::",
# tab, em-dash or " - ". Whitespace around the separator is absorbed
# greedily, so "Foo\t - Bar" splits at " - " rather than at the tab.
SEPARATOR_RE = re.compile(r"^(.*?)\s*(?:\|+|::|\t|—| - )\s*(.*)$")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_front_back(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a basic card line at its first separator.

    The earliest separator in the line wins. When whitespace before it could
    also be read as a tab separator, the longest whitespace run is absorbed
    first and the separator after it is used.

    Returns:
        Optional[Tuple[str, str]]: (front, back), both trimmed, or None when no
        separator is present.
    """
    match = SEPARATOR_RE.match(line)
    if match is None:
        return None
    return match.group(1).strip(), match.group(2).strip()


def parse_line(
    line: str, card_id: int, now: Optional[float] = None
) -> Optional[Card]:
    """
    Build a card from a single deck line.

    Parameters:
        line (str): Raw line; surrounding whitespace is ignored.
        card_id (int): Identifier to give the card.
        now (Optional[float]): Creation time in ms; the card is due then.

    Returns:
        Optional[Card]: The card, or None for a blank line. Any non-blank line
        yields a card; a line with no usable separator becomes a basic card
        with the "(no back)" sentinel.
    """
    text = line.strip()
    if not text:
        return None

    srs = SchedulingState.fresh(now)

    if CLOZE_MARKER in text:
        return ClozeCard(id=card_id, text=text, srs=srs)

    parts = split_front_back(text)
    if parts is None or not parts[0]:
        return BasicCard(id=card_id, front=text, back=NO_BACK_SENTINEL, srs=srs)

    front, back = parts
    return BasicCard(id=card_id, front=front, back=back, srs=srs)


def parse_deck(text: str, now: Optional[float] = None) -> List[Card]:
    """
    Parse newline-delimited deck text into cards.

    Blank lines are dropped and do not consume an id; ids are 1-based over the
    remaining lines. Every card starts with a fresh scheduling state due at
    `now` (defaults to the current time). Never raises on content.
    """
    created_at = now_ms() if now is None else now
    lines = [ln.strip() for ln in _LINE_SPLIT_RE.split(text or "")]
    cards: List[Card] = []
    for line in lines:
        if not line:
            continue
        card = parse_line(line, len(cards) + 1, created_at)
        if card is not None:
            cards.append(card)

    logger.info("Parsed %s cards from deck text.", len(cards))
    return cards
