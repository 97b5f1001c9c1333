from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from content_studio.core.config import get_settings


@lru_cache
def get_engine() -> Engine:
    url = get_settings().sqlalchemy_database_url
    if url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool
        return create_engine(url, connect_args={"check_same_thread": False})

    # Configure connection pooling to prevent connection exhaustion
    return create_engine(
        url,
        pool_size=10,  # Number of connections to maintain persistently
        max_overflow=20,  # Maximum number of connections to create beyond pool_size
        pool_timeout=30,  # Seconds to wait before giving up on getting a connection
        pool_pre_ping=True,  # Verify connections before using them (handles stale connections)
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=False,
    )


@lru_cache
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

