"""Persistence backends for deck state.

The JSON file store is used for local development; configuring
DATABASE_URL (or POSTGRES_URL) switches to the SQL store.
"""

from pathlib import Path

from database import build_database_url, create_database_engine
from shared.utils import config, setup_logging

from .base import DeckStore, StoreError
from .file_store import JSONFileStore
from .sql_store import SQLStore

logger = setup_logging("persistence")

_store: DeckStore | None = None


def create_store(database_url: str | None = None, data_dir: str | Path | None = None) -> DeckStore:
    """Build the store selected by configuration."""
    url = build_database_url(database_url)
    if url:
        logger.info("Using SQL store")
        return SQLStore(create_database_engine(url))
    directory = data_dir or config.get("data_dir", ".data")
    logger.info(f"DATABASE_URL not set, using JSON file store in {directory}")
    return JSONFileStore(directory)


def get_store() -> DeckStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    if _store is None:
        _store = create_store()
    return _store


def set_store(store: DeckStore | None) -> None:
    """Replace (or clear, with None) the process-wide store."""
    global _store
    _store = store


__all__ = [
    "DeckStore",
    "JSONFileStore",
    "SQLStore",
    "StoreError",
    "create_store",
    "get_store",
    "set_store",
]
