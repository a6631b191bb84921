"""
Pydantic models for cards, their scheduling state and review grades.
"""

from __future__ import annotations

import math
import time
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .constants import DEFAULT_EASE, MAX_EASE, MIN_EASE, NO_BACK_SENTINEL


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class Grade(str, Enum):
    """
    Represents the user's self-assessed recall for a card.
    """

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class SessionMode(str, Enum):
    """Review shows only due cards; browse walks the whole deck in order."""

    REVIEW = "review"
    BROWSE = "browse"


class SchedulingState(BaseModel):
    """
    Per-card spaced-repetition state.

    All times are milliseconds; `due` is absolute (since the Unix epoch),
    `interval` is the last applied delay.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    ease: float = Field(
        default=DEFAULT_EASE,
        ge=MIN_EASE,
        le=MAX_EASE,
        description="Multiplier applied to the interval on a successful review.",
    )
    interval: int = Field(
        default=0,
        ge=0,
        description="Last applied delay in ms (0 until the first grade).",
    )
    reps: int = Field(
        default=0,
        ge=0,
        description="Number of non-'again' reviews.",
    )
    lapses: int = Field(
        default=0,
        ge=0,
        description="Number of 'again' grades.",
    )
    due: int = Field(
        default_factory=now_ms,
        description="Timestamp (ms) at which the card becomes eligible.",
    )

    @field_validator("interval", "due", mode="before")
    @classmethod
    def round_to_whole_ms(cls, v):
        """Times are kept as whole milliseconds."""
        if isinstance(v, float) and math.isfinite(v):
            return round(v)
        return v

    @classmethod
    def fresh(cls, now: Optional[float] = None) -> "SchedulingState":
        """Initial state for a new or reset card, due immediately."""
        return cls(due=now_ms() if now is None else now)

    def is_due(self, now: float) -> bool:
        return self.due <= now


class BasicCard(BaseModel):
    """
    Front/back card, e.g. ``Oxidation | Loss of electrons``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: int = Field(
        ...,
        ge=1,
        description="1-based position among non-blank input lines.",
    )
    type: Literal["basic"] = "basic"
    front: str = Field(..., min_length=1, description="Question side.")
    back: str = Field(default=NO_BACK_SENTINEL, description="Answer side.")
    srs: SchedulingState = Field(default_factory=SchedulingState)


class ClozeCard(BaseModel):
    """
    Card whose text holds one or more ``{{cN::hidden}}`` spans.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: int = Field(..., ge=1)
    type: Literal["cloze"] = "cloze"
    text: str = Field(
        ...,
        min_length=1,
        description="Full line, cloze spans included verbatim.",
    )
    srs: SchedulingState = Field(default_factory=SchedulingState)


Card = Annotated[Union[BasicCard, ClozeCard], Field(discriminator="type")]

# Serialized deck form: an ordered JSON array of card records.
DeckAdapter: TypeAdapter[List[Card]] = TypeAdapter(List[Card])
