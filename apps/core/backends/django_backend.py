"""
Django Store Backend - Records persisted through the Django ORM.

Maps each EntityKind onto a model and translates between the public record
field names and model attribute names. Works with whatever database
config/database.py selects (SQLite, PostgreSQL, RDS Proxy).

Usage:
    Set ENTITY_STORE_BACKEND=apps.core.backends.django_backend.DjangoEntityStore
    (this is the default).
"""

import logging
import uuid
from typing import Any, Dict, Iterator, Optional

from django.apps import apps
from django.db import DatabaseError, IntegrityError, transaction

from apps.core.store import (
    UNIQUE_FIELDS,
    DuplicateKey,
    EntityKind,
    EntityStoreInterface,
    Record,
    StoreError,
)

logger = logging.getLogger(__name__)


# kind -> (app_label.ModelName, {record field: model attribute})
MODEL_MAPPING = {
    EntityKind.USER: ("identity.User", {
        "id": "id",
        "username": "username",
        "password": "password",
        "email": "email",
    }),
    EntityKind.LIST: ("lists.TaskList", {
        "id": "id",
        "name": "name",
        "creator": "creator",
        "shared": "shared",
    }),
    EntityKind.TASK: ("lists.Task", {
        "id": "id",
        "name": "name",
        "list": "list_id",
        "done": "done",
        "taskId": "task_id",
    }),
}

# Record fields stored as UUID columns
UUID_FIELDS = {"id", "list"}


class _NoMatch(Exception):
    """Raised while building a lookup that can never match (malformed UUID)."""


class DjangoEntityStore(EntityStoreInterface):
    """
    Persist records with the Django ORM.

    Uniqueness is enforced by unique columns; IntegrityError is reported as
    DuplicateKey. Any other DatabaseError is reported as StoreError.
    """

    def _model(self, kind: EntityKind):
        return apps.get_model(MODEL_MAPPING[kind][0])

    def _fields(self, kind: EntityKind) -> Dict[str, str]:
        return MODEL_MAPPING[kind][1]

    def _to_model_values(self, kind: EntityKind, values: Record) -> Dict[str, Any]:
        fields = self._fields(kind)
        translated = {}
        for key, value in values.items():
            if key not in fields:
                raise StoreError(f"Unknown {kind.value} field: {key}")
            if key in UUID_FIELDS:
                if not self.is_valid_id(value):
                    raise _NoMatch(key)
                value = uuid.UUID(str(value))
            translated[fields[key]] = value
        return translated

    def _to_record(self, kind: EntityKind, obj) -> Record:
        record = {}
        for key, attr in self._fields(kind).items():
            value = getattr(obj, attr)
            record[key] = str(value) if key in UUID_FIELDS else value
        return record

    def _queryset(self, kind: EntityKind, filter: Record):
        lookup = self._to_model_values(kind, filter)
        return self._model(kind).objects.filter(**lookup).order_by("created_at")

    def _duplicate(self, kind: EntityKind, values: Record, exc: IntegrityError) -> DuplicateKey:
        unique = [f for f in UNIQUE_FIELDS[kind] if f in values]
        field = unique[0] if len(unique) == 1 else None
        logger.info(f"Integrity error writing {kind.value}: {exc}")
        return DuplicateKey(kind, field, values.get(field) if field else None)

    def insert(self, kind: EntityKind, record: Record) -> str:
        values = {k: v for k, v in record.items() if k != "id"}
        try:
            model_values = self._to_model_values(kind, values)
        except _NoMatch as e:
            raise StoreError(f"Malformed identifier in {kind.value}.{e}")
        try:
            with transaction.atomic():
                obj = self._model(kind).objects.create(**model_values)
        except IntegrityError as e:
            raise self._duplicate(kind, values, e) from e
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        return str(obj.id)

    def find_one(self, kind: EntityKind, filter: Record) -> Optional[Record]:
        try:
            obj = self._queryset(kind, filter).first()
        except _NoMatch:
            return None
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        return self._to_record(kind, obj) if obj else None

    def find_many(self, kind: EntityKind, filter: Record) -> Iterator[Record]:
        try:
            for obj in self._queryset(kind, filter).iterator():
                yield self._to_record(kind, obj)
        except _NoMatch:
            return
        except DatabaseError as e:
            raise StoreError(str(e)) from e

    def update(self, kind: EntityKind, filter: Record, patch: Record) -> Optional[Record]:
        values = {k: v for k, v in patch.items() if k != "id"}
        try:
            model_values = self._to_model_values(kind, values)
            with transaction.atomic():
                obj = self._queryset(kind, filter).select_for_update().first()
                if obj is None:
                    return None
                for attr, value in model_values.items():
                    setattr(obj, attr, value)
                obj.save(update_fields=list(model_values) or None)
        except _NoMatch:
            return None
        except IntegrityError as e:
            raise self._duplicate(kind, values, e) from e
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        return self._to_record(kind, obj)

    def delete_one(self, kind: EntityKind, filter: Record) -> int:
        try:
            with transaction.atomic():
                obj = self._queryset(kind, filter).select_for_update().first()
                if obj is None:
                    return 0
                obj.delete()
        except _NoMatch:
            return 0
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        return 1

    def delete_many(self, kind: EntityKind, filter: Record) -> int:
        try:
            deleted, _ = self._queryset(kind, filter).delete()
        except _NoMatch:
            return 0
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        return deleted

    def is_valid_id(self, value: Any) -> bool:
        try:
            uuid.UUID(str(value))
        except ValueError:
            return False
        return True
