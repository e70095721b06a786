"""
Storage error taxonomy.

Every failure raised by a persistence context is mapped to exactly one of the
four kinds below. The message carries only the kind; the original exception
stays reachable through ``__cause__``.
"""
from __future__ import annotations

from enum import Enum


class StorageErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class StorageError(Exception):
    """Base class for all store failures."""

    kind: StorageErrorKind

    def __init__(self, message: str | None = None):
        super().__init__(message or f"storage operation failed ({self.kind.value})")


class NotFoundError(StorageError):
    """Fetched rows could not be typed as the store's record type."""

    kind = StorageErrorKind.NOT_FOUND


class ReadError(StorageError):
    """The fetch itself raised."""

    kind = StorageErrorKind.READ


class WriteError(StorageError):
    """Inserting or committing an update raised."""

    kind = StorageErrorKind.WRITE


class DeleteError(StorageError):
    """Deleting or committing the delete raised."""

    kind = StorageErrorKind.DELETE


__all__ = [
    "StorageErrorKind",
    "StorageError",
    "NotFoundError",
    "ReadError",
    "WriteError",
    "DeleteError",
]
