import duckdb
import logging

from .connection import ConnectionHandler
from .schema import DB_SCHEMA_SQL
from ..exceptions import SchemaInitializationError

logger = logging.getLogger(__name__)


class SchemaManager:
    """Creates the key-value table a DeckStore reads and writes."""

    def __init__(self, handler: ConnectionHandler):
        self._handler = handler

    def initialize_schema(self) -> None:
        """
        Create the kv_store table inside a transaction. Existing tables and
        their rows are left as they are.

        Raises:
            SchemaInitializationError: If the DDL fails.
        """
        conn = self._handler.get_connection()
        try:
            with conn.cursor() as cursor:
                cursor.begin()
                cursor.execute(DB_SCHEMA_SQL)
                cursor.commit()
        except duckdb.Error as e:
            logger.error(
                f"Error initializing schema at {self._handler.db_path_resolved}: {e}"  # noqa: E501
            )
            raise SchemaInitializationError(
                f"Failed to initialize schema: {e}", original_exception=e
            ) from e
        logger.debug(f"Schema ready at {self._handler.db_path_resolved}.")
