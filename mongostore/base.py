"""
Base Repository - Common database connection handling.

Provides base class for stores sharing an externally owned MongoDB client.
"""

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import InvalidName

from .errors import StoreConnectionError


class BaseRepository:
    """
    Base class for all repositories.

    Repositories are initialized with a MongoDB client and a database name.
    The client belongs to the caller and is never closed here.
    """

    def __init__(self, client: MongoClient, database_name: str):
        """
        Initialize repository with a client and target database.

        Args:
            client: Connected MongoDB client
            database_name: Database to resolve on the client

        Raises:
            StoreConnectionError: If the database name cannot be resolved
        """
        self.client = client
        self._database_name = database_name
        try:
            self.db: Database = client[database_name]
        except (InvalidName, TypeError) as e:
            raise StoreConnectionError(
                f"Cannot resolve database '{database_name}': {e}",
                operation="initialize",
                database_name=database_name,
                original_error=e,
            ) from e

    @property
    def database_name(self) -> str:
        return self._database_name

    def _get_collection(self, name: str) -> Collection:
        """Get a collection by name."""
        try:
            return self.db[name]
        except (InvalidName, TypeError) as e:
            raise StoreConnectionError(
                f"Cannot resolve collection '{self._database_name}.{name}': {e}",
                operation="initialize",
                database_name=self._database_name,
                collection_name=name,
                original_error=e,
            ) from e
