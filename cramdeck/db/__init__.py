"""Storage package for cramdeck.

Persists the serialized deck and the last-loaded deck text in a DuckDB-backed
key-value table. Only DeckStore and SavedDeck are exported as the public API.
"""

from .database import DeckStore, SavedDeck

__all__ = ["DeckStore", "SavedDeck"]
