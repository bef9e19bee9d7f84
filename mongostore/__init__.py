"""
mongostore - Async single-collection store over pymongo.

This package provides:
- CollectionStore: CRUD, paging and query pass-through on one collection
- PagingSpec / SortSpec: read windowing and ordering
- StoreError and subclasses: failure taxonomy
- StoreSettings / create_client / open_store: environment-driven bootstrap

Usage:
    from mongostore import CollectionStore, PagingSpec

    store = CollectionStore(client, "app_db", "articles")
    await store.verify_database_exists()
    doc_id = await store.insert_one({"title": "Hello"})
    docs = await store.list_all(PagingSpec(page_size=10))
"""

from .base import BaseRepository
from .config import StoreSettings, create_client, open_store
from .errors import (
    StoreError,
    StoreConnectionError,
    NotFoundError,
    QueryError,
    WriteError,
)
from .paging import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGING,
    PagingSpec,
    SortSpec,
    resolve_paging,
)
from .store import CollectionStore, Document

__all__ = [
    # Core
    "CollectionStore",
    "BaseRepository",
    "Document",
    # Paging
    "PagingSpec",
    "SortSpec",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PAGING",
    "resolve_paging",
    # Errors
    "StoreError",
    "StoreConnectionError",
    "NotFoundError",
    "QueryError",
    "WriteError",
    # Config
    "StoreSettings",
    "create_client",
    "open_store",
]
