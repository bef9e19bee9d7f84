"""
Store configuration and client bootstrap.

Reads connection settings from the environment:
- MONGODB_URI: MongoDB URI (default: mongodb://localhost:27017)
- MONGODB_DATABASE: Database name (default: mongostore)
- MONGODB_TIMEOUT_MS: Server selection / connect timeout (default: 5000)

The store layer itself never reads the environment; these helpers are for
whatever process assembles the client and the stores.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional

from pymongo import MongoClient

from .store import CollectionStore

logger = logging.getLogger("mongostore.config")

DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "mongostore"
DEFAULT_TIMEOUT_MS = 5000


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass
class StoreSettings:
    """Connection settings for building a MongoClient."""
    uri: str = DEFAULT_URI
    database_name: str = DEFAULT_DATABASE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    client_options: dict = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "StoreSettings":
        return cls(
            uri=os.environ.get("MONGODB_URI", DEFAULT_URI),
            database_name=os.environ.get("MONGODB_DATABASE", DEFAULT_DATABASE),
            timeout_ms=_env_int("MONGODB_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        )


def create_client(settings: Optional[StoreSettings] = None) -> MongoClient:
    """
    Build a MongoClient from settings (default: from environment).

    The caller owns the returned client and is responsible for closing it.
    """
    settings = settings or StoreSettings.from_env()
    options = {
        "serverSelectionTimeoutMS": settings.timeout_ms,
        "connectTimeoutMS": settings.timeout_ms,
        "socketTimeoutMS": settings.timeout_ms * 2,
    }
    options.update(settings.client_options)

    logger.info(f"[CONFIG] Creating MongoDB client for database '{settings.database_name}'")
    return MongoClient(settings.uri, **options)


def open_store(
    collection_name: str,
    client: Optional[MongoClient] = None,
    settings: Optional[StoreSettings] = None,
) -> CollectionStore:
    """
    Get a CollectionStore for collection_name in the configured database.

    Args:
        collection_name: Target collection
        client: Existing client to reuse (default: create_client(settings))
        settings: Connection settings (default: from environment)

    Returns:
        CollectionStore bound to settings.database_name
    """
    settings = settings or StoreSettings.from_env()
    if client is None:
        client = create_client(settings)
    return CollectionStore(client, settings.database_name, collection_name)
