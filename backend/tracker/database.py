"""Database engine and helpers.

This module builds the SQLModel/SQLAlchemy engine for either storage
variant: an embedded SQLite file (the default, `tracker.db` next to the
backend folder) or a pooled server database selected through
`DATABASE_URL`. The engine lives on the FastAPI app state; request
handlers receive sessions through `get_session`.
"""

import logging

from fastapi import Request
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine, Session

from . import models  # noqa: F401  (registers tables on SQLModel.metadata)
from .config import Settings

logger = logging.getLogger("tracker.db")


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured storage variant.

    SQLite shares one file between threads, so the same-thread check is
    disabled. Server databases get a pre-pinged connection pool sized
    from settings.
    """
    if settings.is_sqlite:
        engine = create_engine(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
    logger.info("engine created for %s", make_url(settings.DATABASE_URL).render_as_string(hide_password=True))
    return engine


def create_db_and_tables(engine: Engine):
    """Create the `users`, `phd_contacts` and `masters_apps` tables.

    `create_all` only emits CREATE TABLE for tables that are missing, so
    this is safe to run on every startup. There is no schema versioning.
    """
    SQLModel.metadata.create_all(engine)


def dispose_engine(engine: Engine):
    """Close pooled connections on shutdown."""
    engine.dispose()
    logger.info("engine disposed")


def get_session(request: Request):
    """Yield a database `Session` for FastAPI dependency injection.

    The engine is read from `request.app.state` so every app instance
    (including test apps) uses its own store.
    """
    with Session(request.app.state.engine) as session:
        yield session
