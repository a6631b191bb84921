"""
This module defines the ReviewSessionManager class, which owns a deck and runs
a review session over it: it picks the active card, gates grading behind a
reveal, applies the scheduler and tracks progress.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Union

from .constants import DEFAULT_DECK
from .db.database import DeckStore
from .models import Card, Grade, SchedulingState, SessionMode, now_ms
from .parser import parse_deck
from .scheduler import BaseScheduler, CramScheduler

# Initialize logger
logger = logging.getLogger(__name__)


class ReviewSessionManager:
    """
    Manages a review session for a deck of flashcards.

    Two modes:
    - review: the active card is the earliest-due card among those due now.
      When nothing is due the session is "caught up" and has no active card.
    - browse: the active card is deck[position]; next/prev wrap around.

    Grading is a two-step gate: grade() on a hidden card only reveals it; a
    second grade() applies the scheduler. When a store is attached, the deck
    is saved after every change to it.
    """

    def __init__(
        self,
        scheduler: Optional[BaseScheduler] = None,
        store: Optional[DeckStore] = None,
        clock: Callable[[], float] = now_ms,
        rng: Optional[random.Random] = None,
        cards: Optional[List[Card]] = None,
        raw_text: str = "",
        mode: SessionMode = SessionMode.REVIEW,
    ):
        """
        Parameters:
            scheduler (BaseScheduler): Computes the next state on a grade; defaults to CramScheduler.
            store (DeckStore): Optional persistence target, written after every deck change.
            clock (Callable[[], float]): Returns the current time in ms.
            rng (random.Random): Source of randomness for shuffling.
            cards (List[Card]): Initial deck; taken over by the manager.
            raw_text (str): Deck text the cards came from.
            mode (SessionMode): Starting mode.
        """
        self.scheduler = scheduler or CramScheduler()
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()
        self.deck: List[Card] = list(cards) if cards else []
        self.raw_text = raw_text
        self.mode = SessionMode(mode)
        self.position = 0
        self.revealed = False

    @classmethod
    def from_store(
        cls, store: DeckStore, persist: bool = True, **kwargs: Any
    ) -> "ReviewSessionManager":
        """
        Restore a session from persisted state.

        Uses the saved deck (with its scheduling state) when readable, else
        re-parses the saved deck text, else parses the default deck. With
        `persist=False` the store is only read, never written.
        """
        manager = cls(store=store if persist else None, **kwargs)
        saved = store.load_state()
        if saved.cards is not None:
            manager.deck = saved.cards
            manager.raw_text = saved.raw_text or ""
            logger.info(f"Restored {len(manager.deck)} cards from saved state.")
        else:
            text = saved.raw_text if saved.raw_text is not None else DEFAULT_DECK
            manager.load_deck(text)
        return manager

    # --- Queries ---

    @property
    def total(self) -> int:
        return len(self.deck)

    def due_queue(self) -> List[int]:
        """
        Deck indices eligible in the current mode, earliest due first. Ties
        keep deck order.
        """
        if self.mode is SessionMode.BROWSE:
            indices = list(range(len(self.deck)))
        else:
            now = self.clock()
            indices = [
                i for i, card in enumerate(self.deck) if card.srs.is_due(now)
            ]
        return sorted(indices, key=lambda i: self.deck[i].srs.due)

    def active_index(self) -> Optional[int]:
        if not self.deck:
            return None
        if self.mode is SessionMode.BROWSE:
            return self.position
        queue = self.due_queue()
        return queue[0] if queue else None

    def active_card(self) -> Optional[Card]:
        """The card on screen, or None for an empty deck or a caught-up review."""
        index = self.active_index()
        return self.deck[index] if index is not None else None

    def is_caught_up(self) -> bool:
        """True in review mode when no card is due."""
        return self.mode is SessionMode.REVIEW and self.active_index() is None

    def due_count(self) -> int:
        """Cards due now in review mode; the whole deck in browse mode."""
        if self.mode is SessionMode.BROWSE:
            return len(self.deck)
        now = self.clock()
        return sum(1 for card in self.deck if card.srs.is_due(now))

    def progress(self) -> int:
        """Percentage of the deck not currently due, 0 for an empty deck."""
        total = len(self.deck)
        if not total:
            return 0
        return round((total - self.due_count()) / total * 100)

    def stats(self) -> Dict[str, Any]:
        return {
            "total_cards": self.total,
            "due_cards": self.due_count(),
            "progress": self.progress(),
            "mode": self.mode.value,
            "total_reps": sum(card.srs.reps for card in self.deck),
            "total_lapses": sum(card.srs.lapses for card in self.deck),
        }

    # --- Commands ---

    def load_deck(self, text: str) -> None:
        """Replace the deck with `text` parsed afresh; prior progress is dropped."""
        self.deck = parse_deck(text, now=self.clock())
        self.raw_text = text
        self.position = 0
        self.revealed = False
        logger.info(f"Loaded deck with {len(self.deck)} cards.")
        self._persist()

    def next(self) -> None:
        self.revealed = False
        if self.mode is SessionMode.BROWSE and self.deck:
            self.position = (self.position + 1) % len(self.deck)

    def prev(self) -> None:
        self.revealed = False
        if self.mode is SessionMode.BROWSE and self.deck:
            self.position = (self.position - 1) % len(self.deck)

    def flip(self) -> None:
        if self.active_index() is None:
            return
        self.revealed = not self.revealed

    def set_mode(self, mode: Union[SessionMode, str]) -> None:
        """Switch modes; unknown mode names are ignored."""
        try:
            new_mode = SessionMode(mode)
        except ValueError:
            logger.debug(f"Ignoring unknown mode {mode!r}.")
            return
        self.mode = new_mode
        self.revealed = False
        if self.position >= len(self.deck):
            self.position = 0

    def toggle_mode(self) -> None:
        if self.mode is SessionMode.REVIEW:
            self.set_mode(SessionMode.BROWSE)
        else:
            self.set_mode(SessionMode.REVIEW)

    def grade(self, level: Union[Grade, str]) -> Optional[Card]:
        """
        Grade the active card.

        A hidden card is only revealed by this call. Once revealed, the
        scheduler updates the card in place in the deck and the answer is
        hidden again.

        Returns:
            Optional[Card]: The updated card, or None if this call only
            revealed the answer or there was no active card.
        """
        index = self.active_index()
        if index is None:
            return None
        if not self.revealed:
            self.revealed = True
            return None

        card = self.deck[index]
        updated = self.scheduler.schedule(card, level, now=self.clock())
        self.deck[index] = updated
        self.revealed = False
        logger.debug(
            f"Card {card.id} graded {level!r}; next due at {updated.srs.due:.0f}."
        )
        self._persist()
        return updated

    def shuffle(self) -> None:
        """Randomly permute the deck in place; scheduling state is kept."""
        self.rng.shuffle(self.deck)
        self.position = 0
        self.revealed = False
        logger.info(f"Shuffled deck of {len(self.deck)} cards.")
        self._persist()

    def reset_progress(self) -> None:
        """Return every card to a fresh scheduling state, due now."""
        now = self.clock()
        self.deck[:] = [
            card.model_copy(update={"srs": SchedulingState.fresh(now)})
            for card in self.deck
        ]
        self.position = 0
        self.revealed = False
        logger.info(f"Reset progress for {len(self.deck)} cards.")
        self._persist()

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save_state(self.deck, self.raw_text)
