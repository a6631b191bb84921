"""
DuckDB-backed key-value store for cramdeck.

Holds two values: the last-loaded deck text and the serialized deck with its
scheduling state. Missing or unreadable values load as absent.
"""

import duckdb
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from . import db_utils
from ..constants import DECK_KEY, INPUT_KEY
from ..exceptions import MarshallingError, StateOperationError
from ..models import Card
from .connection import ConnectionHandler
from .schema_manager import SchemaManager

logger = logging.getLogger(__name__)


@dataclass
class SavedDeck:
    """Persisted session data; each field is None when absent or unreadable."""

    cards: Optional[List[Card]] = None
    raw_text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.cards is None and self.raw_text is None


class DeckStore:
    """
    Facade over the storage subsystem: coordinates the ConnectionHandler,
    SchemaManager and marshalling helpers. Intended for use as a context
    manager.
    """

    _UPSERT_SQL = """
        INSERT INTO kv_store (key, value, updated_at)
        VALUES ($1, $2, $3)
        ON CONFLICT (key) DO UPDATE SET
            value = EXCLUDED.value,
            updated_at = EXCLUDED.updated_at;
        """

    def __init__(self, db_path: Union[str, Path]):
        """
        Create a DeckStore backed by the given DuckDB path.

        Args:
            db_path (str | Path): Path to the database file. Use ':memory:' for an in-memory store.
        """
        self._handler = ConnectionHandler(db_path)
        self._schema_manager = SchemaManager(self._handler)
        self._schema_ready = False

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        """
        Return the active connection, ensuring the schema exists on first use.
        """
        conn = self._handler.get_connection()
        if not self._schema_ready:
            self._schema_manager.initialize_schema()
            self._schema_ready = True
        return conn

    def close_connection(self) -> None:
        self._handler.close_connection()
        self._schema_ready = False

    def __enter__(self) -> "DeckStore":
        self.get_connection()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close_connection()

    # --- Key-value operations ---

    def get_value(self, key: str) -> Optional[str]:
        """
        Fetch the value stored under `key`, or None if there is none.

        Raises:
            StateOperationError: If the query fails.
        """
        conn = self.get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = $1;", (key,)
            ).fetchone()
        except duckdb.Error as e:
            logger.error(f"Error reading key '{key}': {e}")
            raise StateOperationError(
                f"Failed to read '{key}': {e}", original_exception=e
            ) from e
        return row[0] if row else None

    def set_value(self, key: str, value: str) -> None:
        self._write({key: value})

    def delete_value(self, key: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = $1;", (key,))
        except duckdb.Error as e:
            raise StateOperationError(
                f"Failed to delete '{key}': {e}", original_exception=e
            ) from e

    def _write(self, values: dict) -> None:
        """Upsert several keys in one transaction."""
        conn = self.get_connection()
        now = datetime.now(timezone.utc)
        params = [(key, value, now) for key, value in values.items()]
        try:
            with conn.cursor() as cursor:
                cursor.begin()
                cursor.executemany(self._UPSERT_SQL, params)
                cursor.commit()
        except duckdb.Error as e:
            logger.error(f"Error writing keys {sorted(values)}: {e}")
            raise StateOperationError(
                f"Failed to write deck state: {e}", original_exception=e
            ) from e

    # --- Deck state ---

    def save_state(self, cards: Sequence[Card], raw_text: str) -> None:
        """
        Persist the deck and the deck text it was loaded from.

        Raises:
            MarshallingError: If the cards cannot be serialized.
            StateOperationError: If the write fails.
        """
        payload = db_utils.cards_to_json(cards)
        self._write({INPUT_KEY: raw_text, DECK_KEY: payload})
        logger.debug(f"Saved deck state ({len(cards)} cards).")

    def load_state(self) -> SavedDeck:
        """
        Load the persisted deck and deck text.

        A missing value, or a deck payload that fails to parse, comes back as
        None; this never raises for bad persisted content.
        """
        saved = SavedDeck(raw_text=self.get_value(INPUT_KEY))

        payload = self.get_value(DECK_KEY)
        if payload:
            try:
                saved.cards = db_utils.json_to_cards(payload)
            except MarshallingError as e:
                logger.warning(
                    f"Ignoring unreadable saved deck under '{DECK_KEY}': {e}"
                )
        return saved

    def clear(self) -> None:
        """Remove all persisted deck state."""
        self.delete_value(INPUT_KEY)
        self.delete_value(DECK_KEY)
        logger.info("Cleared saved deck state.")
