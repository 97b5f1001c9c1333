"""
Storage backends. The backend is chosen by the STORAGE_BACKEND setting:

- ``sql``: SQLAlchemy against DATABASE_URL (PostgreSQL in production, SQLite locally)
- ``memory``: process-local dictionaries, nothing survives a restart
"""
import logging
from functools import lru_cache

from content_studio.core.config import get_settings
from content_studio.stores.base import Store, USAGE_COUNTERS
from content_studio.stores.memory import MemoryStore
from content_studio.stores.sql import SqlStore

logger = logging.getLogger(__name__)


@lru_cache
def get_memory_store() -> MemoryStore:
    logger.warning("Using the in-memory store. Data will be lost on restart.")
    return MemoryStore()


def get_store():
    """FastAPI dependency yielding the configured store (one DB session per request for SQL)."""
    backend = get_settings().storage_backend
    if backend == "memory":
        yield get_memory_store()
        return

    from content_studio.db.session import get_sessionmaker

    db = get_sessionmaker()()
    try:
        yield SqlStore(db)
    finally:
        db.close()


__all__ = [
    "Store",
    "SqlStore",
    "MemoryStore",
    "USAGE_COUNTERS",
    "get_store",
    "get_memory_store",
]
