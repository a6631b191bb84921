"""
Display text for cards.
"""

import re
from typing import Optional

from .constants import CLOZE_PLACEHOLDER
from .models import Card, ClozeCard

CLOZE_SPAN_RE = re.compile(r"\{\{c\d+::(.*?)\}\}")


def render_cloze(text: str, revealed: bool) -> str:
    """
    Replace every ``{{cN::inner}}`` span with `inner` when revealed, or with
    the placeholder otherwise. Text without spans is returned unchanged.
    """
    replacement = (lambda m: m.group(1)) if revealed else (lambda m: CLOZE_PLACEHOLDER)
    return CLOZE_SPAN_RE.sub(replacement, text)


def card_face(card: Optional[Card], revealed: bool) -> str:
    """
    Text to show for a card: the back of a basic card once revealed (front
    before), or the rendered cloze text.
    """
    if card is None:
        return ""
    if isinstance(card, ClozeCard):
        return render_cloze(card.text, revealed)
    return card.back if revealed else card.front
