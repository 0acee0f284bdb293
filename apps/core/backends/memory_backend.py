"""
In-Memory Store Backend - Process-local storage for tests and demos.

Records live in dictionaries owned by the store instance. No database or
external service is required.

Usage:
    ENTITY_STORE_BACKEND = "apps.core.backends.memory_backend.InMemoryEntityStore"

    # or build one per test
    store = InMemoryEntityStore()
"""

import logging
import threading
import uuid
from typing import Any, Dict, Iterator, Optional

from apps.core.store import (
    UNIQUE_FIELDS,
    DuplicateKey,
    EntityKind,
    EntityStoreInterface,
    Record,
)

logger = logging.getLogger(__name__)


# Identifier fields compared in canonical UUID form, as the ORM backend does
IDENTIFIER_FIELDS = ("id", "list")


def _canonical(values: Record) -> Record:
    canonical = dict(values)
    for field in IDENTIFIER_FIELDS:
        value = canonical.get(field)
        if value is None:
            continue
        try:
            canonical[field] = str(uuid.UUID(str(value)))
        except ValueError:
            pass
    return canonical


def _matches(record: Record, filter: Record) -> bool:
    return all(record.get(field) == value for field, value in filter.items())


class InMemoryEntityStore(EntityStoreInterface):
    """
    Keep records in insertion order, one dict per kind.

    A single lock serializes every call, so each operation is atomic the
    way a document database applies a single write.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._collections: Dict[EntityKind, Dict[str, Record]] = {
            kind: {} for kind in EntityKind
        }

    def _check_unique(self, kind: EntityKind, values: Record, exclude_id: str = None):
        for field in UNIQUE_FIELDS[kind]:
            if field not in values:
                continue
            for record_id, existing in self._collections[kind].items():
                if record_id != exclude_id and existing.get(field) == values[field]:
                    raise DuplicateKey(kind, field, values[field])

    def _first_match(self, kind: EntityKind, filter: Record) -> Optional[Record]:
        filter = _canonical(filter)
        for record in self._collections[kind].values():
            if _matches(record, filter):
                return record
        return None

    def insert(self, kind: EntityKind, record: Record) -> str:
        with self._lock:
            self._check_unique(kind, record)
            record_id = str(uuid.uuid4())
            self._collections[kind][record_id] = {**_canonical(record), "id": record_id}
        logger.debug(f"[MEMORY] Inserted {kind.value} {record_id}")
        return record_id

    def find_one(self, kind: EntityKind, filter: Record) -> Optional[Record]:
        with self._lock:
            record = self._first_match(kind, filter)
            return dict(record) if record else None

    def find_many(self, kind: EntityKind, filter: Record) -> Iterator[Record]:
        filter = _canonical(filter)
        with self._lock:
            snapshot = [
                dict(record)
                for record in self._collections[kind].values()
                if _matches(record, filter)
            ]
        yield from snapshot

    def update(self, kind: EntityKind, filter: Record, patch: Record) -> Optional[Record]:
        with self._lock:
            record = self._first_match(kind, filter)
            if record is None:
                return None
            self._check_unique(kind, patch, exclude_id=record["id"])
            record.update({k: v for k, v in _canonical(patch).items() if k != "id"})
            return dict(record)

    def delete_one(self, kind: EntityKind, filter: Record) -> int:
        with self._lock:
            record = self._first_match(kind, filter)
            if record is None:
                return 0
            del self._collections[kind][record["id"]]
            return 1

    def delete_many(self, kind: EntityKind, filter: Record) -> int:
        filter = _canonical(filter)
        with self._lock:
            doomed = [
                record_id
                for record_id, record in self._collections[kind].items()
                if _matches(record, filter)
            ]
            for record_id in doomed:
                del self._collections[kind][record_id]
        logger.debug(f"[MEMORY] Deleted {len(doomed)} {kind.value} record(s)")
        return len(doomed)

    def is_valid_id(self, value: Any) -> bool:
        try:
            uuid.UUID(str(value))
        except ValueError:
            return False
        return True
