"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration (see
``recordstore.utils.settings``) with an in-memory SQLite fallback and exposes
session dependencies for sync and async callers. Nothing touches the database
URL until the engine is first requested.
"""
import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recordstore.db.models import Base
from recordstore.utils.settings import get_settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    """Extra engine arguments required by the target dialect."""
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return {}
    kwargs = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite with StaticPool so the schema persists across connections
    if parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url`` with dialect-appropriate pooling."""
    kwargs = _engine_kwargs(url)
    logger.debug("Creating engine for %s", make_url(url).render_as_string(hide_password=True))
    return create_engine(url, echo=echo, **kwargs)


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """Return the process-wide engine, built from settings on first use."""
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.sql_echo)


@lru_cache(maxsize=None)
def get_session_factory() -> sessionmaker:
    """Return the ``sessionmaker`` bound to ``get_engine()``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=get_settings().expire_on_commit,
        bind=get_engine(),
    )


def refresh_engine_cache() -> None:
    """Dispose the cached engine and forget it (useful for tests)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def init_schema(bind: Engine | None = None) -> None:
    """Create tables for every record type declared on ``Base``."""
    Base.metadata.create_all(bind=bind or get_engine())


def get_db():
    """Dependency to get a database session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@asynccontextmanager
async def get_async_db_session():
    """Get a session for use inside a coroutine."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
