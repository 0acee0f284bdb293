"""
EntityStore - Abstraction layer for User, List and Task persistence.

This module provides a backend-agnostic interface over three collections of
records. Records are plain dicts using the public field names (``taskId``,
``list``...) with the store-assigned ``id`` exposed as a string.

Usage:
    from apps.core.store import EntityKind, get_store

    store = get_store()
    list_id = store.insert(EntityKind.LIST, {"name": "Groceries", ...})
    store.find_one(EntityKind.LIST, {"id": list_id})

Configuration:
    ENTITY_STORE_BACKEND = "apps.core.backends.django_backend.DjangoEntityStore"
    ENTITY_STORE_BACKEND = "apps.core.backends.memory_backend.InMemoryEntityStore"

The store does not know about relationships between kinds. Cross-entity
rules (task -> list references, cascade deletes) live in the service layer.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

DEFAULT_BACKEND = "apps.core.backends.django_backend.DjangoEntityStore"


class EntityKind(str, Enum):
    USER = "User"
    LIST = "List"
    TASK = "Task"


# Fields every record of a kind must carry (besides ``id``)
RECORD_FIELDS = {
    EntityKind.USER: ("username", "password", "email"),
    EntityKind.LIST: ("name", "creator", "shared"),
    EntityKind.TASK: ("name", "list", "done", "taskId"),
}

# Globally unique fields per kind
UNIQUE_FIELDS = {
    EntityKind.USER: ("username",),
    EntityKind.LIST: (),
    EntityKind.TASK: ("taskId",),
}


class StoreError(Exception):
    """Unexpected failure inside a store backend."""


class DuplicateKey(StoreError):
    """A write would violate a uniqueness constraint."""

    def __init__(self, kind: EntityKind, field: Optional[str] = None, value: Any = None):
        self.kind = kind
        self.field = field
        self.value = value
        if field:
            message = f"Duplicate {kind.value}.{field}: {value!r}"
        else:
            message = f"Duplicate {kind.value} record"
        super().__init__(message)


class EntityStoreInterface(ABC):
    """
    Abstract interface for entity persistence.

    Implementations:
    - DjangoEntityStore: Django ORM models on the configured database
    - InMemoryEntityStore: process-local dictionaries for tests

    Every method is atomic on its own. Nothing spans two calls.
    """

    @abstractmethod
    def insert(self, kind: EntityKind, record: Record) -> str:
        """
        Store a new record.

        Args:
            kind: Collection to write to
            record: Field values, without ``id``

        Returns:
            The store-assigned id

        Raises:
            DuplicateKey: If a unique field already holds the value
        """

    @abstractmethod
    def find_one(self, kind: EntityKind, filter: Record) -> Optional[Record]:
        """Return the first record matching every field of ``filter``, or None."""

    @abstractmethod
    def find_many(self, kind: EntityKind, filter: Record) -> Iterator[Record]:
        """Lazily yield every matching record. An empty filter matches all."""

    @abstractmethod
    def update(self, kind: EntityKind, filter: Record, patch: Record) -> Optional[Record]:
        """Apply ``patch`` to the first match and return it, or None if nothing matched."""

    @abstractmethod
    def delete_one(self, kind: EntityKind, filter: Record) -> int:
        """Remove the first match. Returns 0 or 1."""

    @abstractmethod
    def delete_many(self, kind: EntityKind, filter: Record) -> int:
        """Remove every match. Returns the number removed."""

    @abstractmethod
    def is_valid_id(self, value: Any) -> bool:
        """Whether ``value`` is a well-formed identifier for this store."""


@lru_cache(maxsize=None)
def _load_store(backend_path: str) -> EntityStoreInterface:
    logger.info(f"Initializing entity store backend {backend_path}")
    backend_class = import_string(backend_path)
    return backend_class()


def get_store() -> EntityStoreInterface:
    """Get the configured store based on the ENTITY_STORE_BACKEND setting."""
    backend_path = getattr(settings, "ENTITY_STORE_BACKEND", DEFAULT_BACKEND)
    return _load_store(backend_path)


def clear_store_cache():
    """Drop cached store instances so the next get_store() builds a fresh one."""
    _load_store.cache_clear()
