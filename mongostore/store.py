"""
Collection Store - Async CRUD access to a single MongoDB collection.

Handles:
- Database existence check against the server listing
- Paged listing, filtered finds, counts and single-document lookups
- Inserts, bulk updates, partial updates by _id and deletes by _id

Every operation is one blocking pymongo call run on a worker thread via
asyncio.to_thread, so callers await it from the event loop. Driver failures
are re-raised as StoreError subclasses (see errors.py); a missing document
is returned as None, never raised.

Usage:
    store = CollectionStore(client, "app_db", "articles")
    await store.verify_database_exists()
    doc_id = await store.insert_one({"title": "Hello"})
    doc = await store.get_by_id(doc_id)
    page = await store.list_all(PagingSpec(page_size=10, page=2))
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .base import BaseRepository
from .errors import (
    NotFoundError,
    QueryError,
    StoreConnectionError,
    StoreError,
    WriteError,
)
from .paging import DEFAULT_PAGING, PagingSpec, SortSpec, resolve_paging

logger = logging.getLogger("mongostore.store")

Document = Dict[str, Any]


class CollectionStore(BaseRepository):
    """
    Store bound to one (client, database, collection) triple.

    The database and collection names are fixed at construction. The client
    is shared and owned by the caller; the store never closes it.
    """

    def __init__(self, client: MongoClient, database_name: str, collection_name: str):
        """
        Resolve and cache the target collection handle.

        Args:
            client: Connected MongoDB client
            database_name: Target database
            collection_name: Target collection

        Raises:
            StoreConnectionError: If either name cannot be resolved
        """
        super().__init__(client, database_name)
        self._collection_name = collection_name
        self.collection: Collection = self._get_collection(collection_name)

    @property
    def collection_name(self) -> str:
        return self._collection_name

    # =========================================================================
    # Connectivity
    # =========================================================================

    async def verify_database_exists(self) -> None:
        """
        Check that the configured database appears in the server listing.

        Raises:
            StoreConnectionError: If the listing cannot be retrieved
            NotFoundError: If the database is not listed
        """
        try:
            names = await asyncio.to_thread(self.client.list_database_names)
        except PyMongoError as e:
            logger.warning(f"[STORE] listDatabases failed for {self.database_name}: {e}")
            raise self._error(StoreConnectionError, "verify_database_exists", e) from e

        if self.database_name not in names:
            logger.error(f"[STORE] Database '{self.database_name}' not found on server")
            raise NotFoundError(
                f"Database '{self.database_name}' does not exist",
                operation="verify_database_exists",
                database_name=self.database_name,
                collection_name=self.collection_name,
            )

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_all(self, paging: Optional[PagingSpec] = None) -> List[Document]:
        """
        Get one page of documents in natural order.

        Args:
            paging: Page window (default: 25 per page, first page)

        Returns:
            Up to page_size documents starting at page * page_size
        """
        effective = resolve_paging(paging)
        return await self._run(
            "list_all", QueryError, self._fetch, {}, None, None, effective
        )

    async def count_matching(self, query: Optional[Mapping[str, Any]] = None) -> int:
        """Count documents matching query (whole collection if omitted)."""
        return await self._run(
            "count_matching",
            QueryError,
            self.collection.count_documents,
            query if query is not None else {},
        )

    async def get_by_id(self, doc_id: Union[str, ObjectId]) -> Optional[Document]:
        """
        Get a document by _id.

        Returns:
            The document, or None if no document has that _id

        Raises:
            QueryError: If doc_id is malformed or the lookup fails
        """
        object_id = self._to_object_id(doc_id, "get_by_id", QueryError)
        return await self._run(
            "get_by_id", QueryError, self.collection.find_one, {"_id": object_id}
        )

    async def find(
        self,
        query: Mapping[str, Any],
        projection: Optional[Mapping[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        paging: Optional[PagingSpec] = DEFAULT_PAGING,
    ) -> List[Document]:
        """
        Find documents matching query.

        Args:
            query: MongoDB filter, passed through as-is
            projection: Fields to include/exclude, passed through as-is
            sort: Optional sort keys and direction
            paging: Page window; pass None to return every match

        Returns:
            Matching documents
        """
        effective = resolve_paging(paging) if paging is not None else None
        return await self._run(
            "find", QueryError, self._fetch, query, projection, sort, effective
        )

    async def find_one(self, query: Mapping[str, Any]) -> Optional[Document]:
        """
        Get the first document matching query, or None.

        Driver failures raise QueryError; only an empty match returns None.
        """
        return await self._run("find_one", QueryError, self.collection.find_one, query)

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert_one(self, doc: Document) -> str:
        """
        Insert a document.

        pymongo assigns an ObjectId _id when the document has none and sets
        it on doc in place.

        Returns:
            String form of the inserted _id
        """
        result = await self._run("insert_one", WriteError, self.collection.insert_one, doc)
        return str(result.inserted_id)

    async def update_many(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> None:
        """Apply a caller-supplied update document to every match."""
        await self._run("update_many", WriteError, self.collection.update_many, query, update)

    async def update_by_id(self, doc: Document) -> None:
        """
        Merge doc's fields into the stored document with the same _id.

        Fields absent from doc are left untouched ($set, not replace).
        An _id that is not an ObjectId hex string is matched as given.

        Raises:
            WriteError: If doc has no _id, no document matched, or
                the update fails
        """
        doc_id = doc.get("_id")
        if doc_id is None or ObjectId.is_valid(doc_id):
            object_id = self._to_object_id(doc_id, "update_by_id", WriteError)
        else:
            object_id = doc_id
        fields = {key: value for key, value in doc.items() if key != "_id"}

        if fields:
            result = await self._run(
                "update_by_id",
                WriteError,
                self.collection.update_one,
                {"_id": object_id},
                {"$set": fields},
            )
            matched = result.matched_count > 0
        else:
            # Empty $set is rejected by servers before 5.0
            existing = await self._run(
                "update_by_id",
                WriteError,
                self.collection.find_one,
                {"_id": object_id},
                {"_id": 1},
            )
            matched = existing is not None

        if not matched:
            logger.warning(
                f"[STORE] update_by_id matched nothing in "
                f"{self.database_name}.{self.collection_name} (_id={object_id})"
            )
            raise WriteError(
                f"No document with _id {object_id}",
                operation="update_by_id",
                database_name=self.database_name,
                collection_name=self.collection_name,
            )

    async def delete_by_id(self, doc_id: Union[str, ObjectId]) -> None:
        """Delete a document by _id. Deleting a missing _id is not an error."""
        object_id = self._to_object_id(doc_id, "delete_by_id", WriteError)
        await self._run("delete_by_id", WriteError, self.collection.delete_one, {"_id": object_id})

    # =========================================================================
    # Aliases
    # =========================================================================

    async def create(self, doc: Document) -> str:
        """Alias for insert_one()."""
        return await self.insert_one(doc)

    async def list(self) -> List[Document]:
        """Alias for list_all() with default paging."""
        return await self.list_all()

    async def remove(self, doc_id: Union[str, ObjectId]) -> None:
        """Alias for delete_by_id()."""
        await self.delete_by_id(doc_id)

    # =========================================================================
    # Internal
    # =========================================================================

    def _fetch(
        self,
        query: Mapping[str, Any],
        projection: Optional[Mapping[str, Any]],
        sort: Optional[SortSpec],
        paging: Optional[PagingSpec],
    ) -> List[Document]:
        """Build and drain a cursor. Runs on the worker thread."""
        cursor = self.collection.find(query, projection)
        if sort is not None:
            cursor = cursor.sort(sort.to_pymongo())
        if paging is not None:
            cursor = cursor.skip(paging.skip).limit(paging.page_size)
        return list(cursor)

    async def _run(
        self,
        operation: str,
        error_cls: Type[StoreError],
        func: Callable[..., Any],
        *args: Any,
    ) -> Any:
        """Run one driver call off the event loop, mapping driver errors to error_cls."""
        try:
            result = await asyncio.to_thread(func, *args)
        except (PyMongoError, BSONError) as e:
            logger.warning(
                f"[STORE] {operation} failed on "
                f"{self.database_name}.{self.collection_name}: {e}"
            )
            raise self._error(error_cls, operation, e) from e

        logger.debug(f"[STORE] {operation} on {self.database_name}.{self.collection_name}")
        return result

    def _to_object_id(
        self, doc_id: Any, operation: str, error_cls: Type[StoreError]
    ) -> ObjectId:
        if isinstance(doc_id, ObjectId):
            return doc_id
        # ObjectId(None) would generate a fresh id
        if doc_id is None:
            raise self._error(error_cls, operation, InvalidId("_id is missing"))
        try:
            return ObjectId(doc_id)
        except (InvalidId, TypeError) as e:
            raise self._error(error_cls, operation, e) from e

    def _error(
        self, error_cls: Type[StoreError], operation: str, cause: Exception
    ) -> StoreError:
        return error_cls(
            f"{operation} failed on {self.database_name}.{self.collection_name}: {cause}",
            operation=operation,
            database_name=self.database_name,
            collection_name=self.collection_name,
            original_error=cause,
        )
