from typing import Optional


class DatabaseError(Exception):
    """Base exception for storage-related errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class DatabaseConnectionError(DatabaseError):
    """Raised for errors connecting to the database."""

    pass


class SchemaInitializationError(DatabaseError):
    """Raised for errors during schema setup."""

    pass


class MarshallingError(DatabaseError):
    """Indicates an error converting between card models and their
    serialized form."""

    pass


class StateOperationError(DatabaseError):
    """Raised when reading or writing persisted deck state fails."""

    pass
