import duckdb
import logging
from pathlib import Path
from typing import Optional, Union

from ..exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class ConnectionHandler:
    """Opens, reuses and closes the single DuckDB connection of a DeckStore."""

    def __init__(self, db_path: Union[str, Path]):
        """
        Parameters:
            db_path (Union[str, Path]): Database file, or ":memory:"
                (case-insensitive) for a throwaway in-memory store. File paths
                are expanded and resolved.
        """
        self.is_memory = str(db_path).lower() == MEMORY_PATH
        if self.is_memory:
            self.db_path_resolved = Path(MEMORY_PATH)
        else:
            self.db_path_resolved = Path(db_path).expanduser().resolve()
        self._connection: Optional[duckdb.DuckDBPyConnection] = None

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        """
        Return the open connection, connecting first if needed. The parent
        directory of a file database is created on demand.

        Raises:
            DatabaseConnectionError: If the directory or the connection cannot
                be created.
        """
        if self._connection is not None:
            return self._connection

        try:
            if not self.is_memory:
                self.db_path_resolved.parent.mkdir(parents=True, exist_ok=True)
            self._connection = duckdb.connect(database=str(self.db_path_resolved))
        except (duckdb.Error, OSError) as e:
            raise DatabaseConnectionError(
                f"Failed to open deck store at {self.db_path_resolved}: {e}",
                original_exception=e,
            ) from e
        logger.info(f"Opened deck store at {self.db_path_resolved}.")
        return self._connection

    def close_connection(self) -> None:
        """Close the connection if open; a later get_connection() reopens it."""
        if self._connection is None:
            return
        try:
            self._connection.close()
            logger.info(f"Closed deck store at {self.db_path_resolved}.")
        except duckdb.Error as e:
            logger.error(f"Error closing deck store: {e}")
        finally:
            self._connection = None
