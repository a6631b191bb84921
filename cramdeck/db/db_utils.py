"""
Utility functions for converting cards to and from their persisted JSON form.
This module keeps the storage logic independent of serialization details.
"""

from typing import List, Sequence

from pydantic import ValidationError

from ..exceptions import MarshallingError
from ..models import Card, DeckAdapter


def cards_to_json(cards: Sequence[Card]) -> str:
    """
    Serialize cards to the persisted deck form.

    Returns:
        str: A JSON array of card records (id, type, type fields and
        srs{ease, interval, reps, lapses, due}), in deck order.

    Raises:
        MarshallingError: If the cards cannot be serialized.
    """
    try:
        return DeckAdapter.dump_json(list(cards)).decode("utf-8")
    except (ValidationError, TypeError, ValueError) as e:
        raise MarshallingError(
            f"Failed to serialize deck: {e}", original_exception=e
        ) from e


def json_to_cards(payload: str) -> List[Card]:
    """
    Rebuild cards from their persisted JSON form.

    Raises:
        MarshallingError: If the payload is not valid JSON or any record fails
            validation (unknown type, missing field, ease out of bounds, ...).
    """
    try:
        return DeckAdapter.validate_json(payload)
    except ValidationError as e:
        raise MarshallingError(
            f"Data validation failed for deck: {e}", original_exception=e
        ) from e
