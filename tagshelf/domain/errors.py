# tagshelf/domain/errors.py
from __future__ import annotations


class StorageError(Exception):
    """Base class for every failure surfaced by the article/tag store."""


class ConstraintViolationError(StorageError):
    """A unique or foreign-key constraint rejected the write (e.g. duplicate article URL)."""


class InvalidCriteriaError(StorageError, ValueError):
    """Query input that cannot form a valid statement (e.g. an empty tag set)."""


class ReconciliationError(StorageError):
    """
    Tags inserted in the reconcile step could not all be looked up again.
    The invariant callers rely on no longer holds; treat as fatal.
    """


class SchemaInitError(StorageError):
    """Creating tables/indexes failed. Fatal at startup."""


class StoreClosedError(StorageError):
    """Operation attempted after the store was closed."""
