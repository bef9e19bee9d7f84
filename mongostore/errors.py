"""
Store Errors - Failure taxonomy for collection store operations.

Every driver failure surfaced by CollectionStore is re-raised as one of
these, with the original pymongo/bson exception chained as the cause.
"""

from typing import Optional


class StoreError(Exception):
    """
    Base exception for store errors.

    Attributes:
        operation: Store operation that failed (e.g. "find")
        database_name: Target database
        collection_name: Target collection
        original_error: Underlying driver exception, if any
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        database_name: Optional[str] = None,
        collection_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.database_name = database_name
        self.collection_name = collection_name
        self.original_error = original_error


class StoreConnectionError(StoreError):
    """Raised when the database listing or handle resolution cannot complete."""
    pass


class NotFoundError(StoreError):
    """Raised when the configured database is missing from the server listing."""
    pass


class QueryError(StoreError):
    """Raised when a read operation fails."""
    pass


class WriteError(StoreError):
    """Raised when a write operation fails."""
    pass
