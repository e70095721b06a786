"""
Generic asynchronous CRUD + query store over one record type.

Every operation is a single-shot coroutine: awaiting it yields one value or
raises one ``StorageError``. All work is delegated to the persistence context;
the store keeps no state of its own besides the context reference.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session, registry as Registry

from recordstore.db.context import PersistenceContext, Query, SessionContext
from recordstore.errors import DeleteError, NotFoundError, ReadError, WriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObjectStore(Generic[T]):
    """Asynchronous façade over a ``PersistenceContext`` for records of ``model``."""

    def __init__(self, context: PersistenceContext, model: Type[T]):
        self._context = context
        self._model = model

    @classmethod
    def for_session(
        cls,
        session: Session,
        model: Type[T],
        registry: Optional[Registry] = None,
    ) -> "ObjectStore[T]":
        """Build a store over an existing SQLAlchemy session."""
        return cls(SessionContext(session, registry=registry), model)

    @property
    def context(self) -> PersistenceContext:
        return self._context

    @property
    def model(self) -> Type[T]:
        return self._model

    def create_transient(self, **fields: Any) -> T:
        """Return a new record that is not yet tracked or persisted."""
        return self._model(**fields)

    async def save(self, record: T, is_update: bool = False) -> T:
        """Insert (or, with ``is_update``, just commit changes to) ``record``."""
        try:
            if not is_update:
                self._context.insert(record)
            self._context.save()
        except Exception as exc:
            logger.warning("Failed to save %s (update=%s): %s", self._model.__name__, is_update, exc)
            raise WriteError() from exc
        logger.debug("Saved %s (update=%s)", self._model.__name__, is_update)
        return record

    async def delete(self, record: T) -> T:
        """Remove ``record`` and commit; returns the detached record."""
        try:
            self._context.delete(record)
            self._context.save()
        except Exception as exc:
            logger.warning("Failed to delete %s: %s", self._model.__name__, exc)
            raise DeleteError() from exc
        logger.debug("Deleted %s", self._model.__name__)
        return record

    async def fetch_all(self, entity_name: str) -> List[T]:
        """All records of ``entity_name``; empty list when there are none."""
        return self._fetch(entity_name, None)

    async def fetch_where(self, predicate: Any, entity_name: str) -> List[T]:
        """Records of ``entity_name`` matching ``predicate``."""
        return self._fetch(entity_name, predicate)

    def _fetch(self, entity_name: str, predicate: Any) -> List[T]:
        try:
            rows = list(self._context.fetch(Query(entity_name=entity_name, predicate=predicate)))
        except Exception as exc:
            logger.warning("Failed to fetch %r: %s", entity_name, exc)
            raise ReadError() from exc
        # Rows of another type count as "nothing found"; zero rows is still a success
        if not all(isinstance(row, self._model) for row in rows):
            logger.warning("Fetch of %r returned rows that are not %s", entity_name, self._model.__name__)
            raise NotFoundError()
        logger.debug("Fetched %d %s row(s) for %r", len(rows), self._model.__name__, entity_name)
        return rows
