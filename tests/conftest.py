"""
Pytest configuration and shared fixtures.

This module provides:
- In-memory MongoDB client (mongomock)
- Store fixtures bound to a test collection
- A store whose collection raises driver errors
"""

from unittest.mock import MagicMock

import mongomock
import pytest

from mongostore import CollectionStore

DATABASE_NAME = "app_db"
COLLECTION_NAME = "articles"


@pytest.fixture
def client():
    """Fresh in-memory MongoDB client per test."""
    return mongomock.MongoClient()


@pytest.fixture
def store(client):
    """Store over the in-memory client."""
    return CollectionStore(client, DATABASE_NAME, COLLECTION_NAME)


@pytest.fixture
def failing_collection():
    """Collection mock; tests set side_effect on the method under test."""
    return MagicMock()


@pytest.fixture
def failing_store(client, failing_collection):
    """Store whose collection handle is replaced by a mock."""
    store = CollectionStore(client, DATABASE_NAME, COLLECTION_NAME)
    store.collection = failing_collection
    return store
