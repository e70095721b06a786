"""
recordstore: asynchronous CRUD and query wrapper over a persistence context.

``ObjectStore`` is the entry point; errors live in ``recordstore.errors`` and
the SQLAlchemy plumbing under ``recordstore.db``.
"""

from .errors import (
    DeleteError,
    NotFoundError,
    ReadError,
    StorageError,
    StorageErrorKind,
    WriteError,
)
from .db.context import PersistenceContext, Query, SessionContext
from .store import ObjectStore

__all__ = [
    "ObjectStore",
    "PersistenceContext",
    "Query",
    "SessionContext",
    "StorageError",
    "StorageErrorKind",
    "NotFoundError",
    "ReadError",
    "WriteError",
    "DeleteError",
]
