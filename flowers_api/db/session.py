"""
Engine, sessions and schema for the SQL document store.

The engine is built once per process from ``DATABASE_URL``; callers clear
the caches (``get_engine.cache_clear()``) when the URL changes, as the tests do.
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from flowers_api.core.config import get_settings

Base = declarative_base()


@lru_cache
def get_engine():
    url = (get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    """Session scoped to one repository call; uncommitted work is rolled back on error."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema() -> None:
    """Create the ``documents`` table if it does not exist yet."""
    from . import models  # noqa: F401  # registers the tables on Base.metadata

    Base.metadata.create_all(bind=get_engine())
