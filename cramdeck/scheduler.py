# cramdeck/scheduler.py

"""
Defines the BaseScheduler abstract class and the CramScheduler, a simplified
interval scheduler tuned for short (~10 day) cram windows.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from pydantic import BaseModel, Field

from .constants import (
    DAY_MS,
    HOUR_MS,
    MAX_EASE,
    MAX_INTERVAL_MS,
    MIN_EASE,
    MINUTE_MS,
)
from .models import Card, Grade, SchedulingState, now_ms

logger = logging.getLogger(__name__)


class BaseScheduler(ABC):
    """
    Abstract base class for all schedulers in cramdeck.
    """

    @abstractmethod
    def compute_next_state(
        self,
        srs: SchedulingState,
        grade: Union[Grade, str],
        now: float,
    ) -> SchedulingState:
        """
        Computes the next scheduling state of a card for a new grade.

        Args:
            srs: The card's current scheduling state.
            grade: The grade given for this review ('again', 'hard', 'good', 'easy').
            now: Time of the review in ms since the epoch.

        Returns:
            The new SchedulingState. Unrecognized grades return `srs` unchanged.
        """
        pass

    def schedule(
        self,
        card: Card,
        grade: Union[Grade, str],
        now: Optional[float] = None,
    ) -> Card:
        """
        Return a copy of `card` carrying its next scheduling state. The input
        card is left untouched.
        """
        ts = now_ms() if now is None else now
        new_srs = self.compute_next_state(card.srs, grade, ts)
        return card.model_copy(update={"srs": new_srs})


class CramSchedulerConfig(BaseModel):
    """Configuration for the cram scheduler. All durations in ms."""

    max_interval: float = MAX_INTERVAL_MS
    again_delay: float = 5 * MINUTE_MS
    first_hard_delay: float = 20 * MINUTE_MS
    first_good_delay: float = 8 * HOUR_MS
    first_easy_delay: float = 1 * DAY_MS
    # Stands in for an interval that has not been established yet.
    baseline_interval: float = 8 * HOUR_MS

    hard_factor: float = 0.6
    good_min_factor: float = 1.7
    easy_bonus: float = 0.15

    min_ease: float = MIN_EASE
    max_ease: float = MAX_EASE
    again_ease_step: float = Field(default=0.2, ge=0)
    hard_ease_step: float = Field(default=0.05, ge=0)
    easy_ease_step: float = Field(default=0.05, ge=0)


class CramScheduler(BaseScheduler):
    """
    Ease/interval scheduler with a hard cap on any single delay.

    again: +1 lapse, ease down, retry in 5 minutes.
    hard:  +1 rep, ease slightly down, 20 minutes first time, else 0.6x.
    good:  +1 rep, ease kept, 8 hours first time, else x max(1.7, ease).
    easy:  +1 rep, ease slightly up, 1 day first time, else x (ease + 0.15).

    Delays are measured from the grading time, not the previous due time.
    """

    def __init__(self, config: Optional[CramSchedulerConfig] = None):
        if config is None:
            config = CramSchedulerConfig()
        self.config = config

    def _parse_grade(self, grade: Union[Grade, str]) -> Optional[Grade]:
        try:
            return Grade(grade)
        except ValueError:
            return None

    def _base_interval(self, srs: SchedulingState) -> float:
        return srs.interval or self.config.baseline_interval

    def _capped(self, delay: float) -> float:
        return min(self.config.max_interval, delay)

    def compute_next_state(
        self,
        srs: SchedulingState,
        grade: Union[Grade, str],
        now: float,
    ) -> SchedulingState:
        parsed = self._parse_grade(grade)
        if parsed is None:
            logger.debug(f"Ignoring unrecognized grade {grade!r}.")
            return srs

        cfg = self.config
        first = srs.reps == 0
        ease = srs.ease
        reps = srs.reps
        lapses = srs.lapses

        if parsed is Grade.AGAIN:
            lapses += 1
            ease = max(cfg.min_ease, ease - cfg.again_ease_step)
            added = cfg.again_delay
        elif parsed is Grade.HARD:
            reps += 1
            ease = max(cfg.min_ease, ease - cfg.hard_ease_step)
            added = (
                cfg.first_hard_delay
                if first
                else self._capped(self._base_interval(srs) * cfg.hard_factor)
            )
        elif parsed is Grade.GOOD:
            reps += 1
            added = (
                cfg.first_good_delay
                if first
                else self._capped(
                    self._base_interval(srs) * max(cfg.good_min_factor, ease)
                )
            )
        else:
            reps += 1
            # The delay uses the raised ease.
            ease = min(cfg.max_ease, ease + cfg.easy_ease_step)
            added = (
                cfg.first_easy_delay
                if first
                else self._capped(
                    self._base_interval(srs) * (ease + cfg.easy_bonus)
                )
            )

        # Stored times are whole milliseconds.
        added = round(added)

        logger.debug(
            f"Graded '{parsed.value}': interval {srs.interval:.0f} -> "
            f"{added:.0f} ms, ease {srs.ease:.2f} -> {ease:.2f}"
        )

        return SchedulingState(
            ease=ease,
            interval=added,
            reps=reps,
            lapses=lapses,
            due=now + added,
        )
