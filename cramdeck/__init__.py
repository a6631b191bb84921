"""cramdeck - Flashcard review with a spaced-repetition scheduler tuned for short cram windows."""

from .models import BasicCard, Card, ClozeCard, Grade, SchedulingState, SessionMode
from .parser import parse_deck
from .renderer import card_face, render_cloze
from .scheduler import CramScheduler, CramSchedulerConfig
from .review_manager import ReviewSessionManager
from .db import DeckStore

__all__ = [
    "BasicCard",
    "Card",
    "ClozeCard",
    "Grade",
    "SchedulingState",
    "SessionMode",
    "parse_deck",
    "card_face",
    "render_cloze",
    "CramScheduler",
    "CramSchedulerConfig",
    "ReviewSessionManager",
    "DeckStore",
]
