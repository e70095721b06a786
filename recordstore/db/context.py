"""
Persistence context protocol and the SQLAlchemy session adapter.

``ObjectStore`` talks only to ``PersistenceContext``; ``SessionContext`` is the
implementation backed by an ORM ``Session``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select, text
from sqlalchemy.orm import Session, registry as Registry

from recordstore.db.models import Base

logger = logging.getLogger(__name__)


class Query(BaseModel):
    """Entity name plus an optional filter predicate.

    ``predicate`` is opaque here. ``SessionContext`` accepts a SQLAlchemy
    boolean expression or a textual ``WHERE`` fragment.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    entity_name: str = Field(min_length=1)
    predicate: Optional[Any] = None


@runtime_checkable
class PersistenceContext(Protocol):
    """Unit of work the store delegates to."""

    def insert(self, record: Any) -> None:
        ...

    def delete(self, record: Any) -> None:
        ...

    def fetch(self, query: Query) -> Sequence[Any]:
        ...

    def save(self) -> None:
        ...


class SessionContext:
    """``PersistenceContext`` over a SQLAlchemy ``Session``.

    The session is borrowed: this adapter never closes it.
    """

    def __init__(self, session: Session, registry: Registry | None = None):
        self.session = session
        self._registry = registry if registry is not None else Base.registry

    def insert(self, record: Any) -> None:
        self.session.add(record)

    def delete(self, record: Any) -> None:
        self.session.delete(record)

    def resolve_entity(self, entity_name: str) -> type | None:
        """Return the mapped class whose class name or table name matches."""
        for mapper in self._registry.mappers:
            table = getattr(mapper, "local_table", None)
            if mapper.class_.__name__ == entity_name or getattr(table, "name", None) == entity_name:
                return mapper.class_
        return None

    def fetch(self, query: Query) -> Sequence[Any]:
        entity = self.resolve_entity(query.entity_name)
        if entity is None:
            logger.debug("No mapped entity named %r; returning no rows", query.entity_name)
            return []
        stmt = select(entity)
        if query.predicate is not None:
            predicate = text(query.predicate) if isinstance(query.predicate, str) else query.predicate
            stmt = stmt.where(predicate)
        return list(self.session.scalars(stmt))

    def save(self) -> None:
        try:
            self.session.commit()
        except Exception:
            # Pending inserts are expunged; a retry adds the record again
            self.session.rollback()
            raise
