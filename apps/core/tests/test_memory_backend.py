"""
Unit tests for the in-memory entity store.
"""
import types

from django.test import SimpleTestCase

from apps.core.backends.memory_backend import InMemoryEntityStore
from apps.core.store import DuplicateKey, EntityKind


class InMemoryEntityStoreTest(SimpleTestCase):
    """Test store contract against the memory backend."""

    def setUp(self):
        self.store = InMemoryEntityStore()

    def _task(self, task_id, list_id="list-1", done=False):
        return {"name": f"Task {task_id}", "list": list_id, "done": done, "taskId": task_id}

    def test_insert_assigns_string_id(self):
        user_id = self.store.insert(EntityKind.USER, {
            "username": "alice", "password": "pw", "email": "alice@example.com",
        })
        self.assertIsInstance(user_id, str)
        self.assertTrue(self.store.is_valid_id(user_id))

        user = self.store.find_one(EntityKind.USER, {"id": user_id})
        self.assertEqual(user["username"], "alice")

    def test_insert_rejects_duplicate_username(self):
        record = {"username": "alice", "password": "pw", "email": "a@example.com"}
        self.store.insert(EntityKind.USER, record)

        with self.assertRaises(DuplicateKey) as ctx:
            self.store.insert(EntityKind.USER, {**record, "password": "other"})
        self.assertEqual(ctx.exception.field, "username")

    def test_insert_rejects_duplicate_task_id(self):
        self.store.insert(EntityKind.TASK, self._task("t1"))
        with self.assertRaises(DuplicateKey):
            self.store.insert(EntityKind.TASK, self._task("t1", list_id="list-2"))

    def test_list_names_are_not_unique(self):
        record = {"name": "Groceries", "creator": "alice", "shared": False}
        self.store.insert(EntityKind.LIST, record)
        self.store.insert(EntityKind.LIST, record)
        self.assertEqual(len(list(self.store.find_many(EntityKind.LIST, {}))), 2)

    def test_find_one_multi_field_filter(self):
        self.store.insert(EntityKind.LIST, {"name": "Groceries", "creator": "alice", "shared": False})
        self.store.insert(EntityKind.LIST, {"name": "Groceries", "creator": "bob", "shared": True})

        found = self.store.find_one(EntityKind.LIST, {"name": "Groceries", "creator": "bob"})
        self.assertTrue(found["shared"])
        self.assertIsNone(self.store.find_one(EntityKind.LIST, {"name": "Groceries", "creator": "carol"}))

    def test_find_many_is_lazy(self):
        self.store.insert(EntityKind.TASK, self._task("t1"))
        result = self.store.find_many(EntityKind.TASK, {"list": "list-1"})
        self.assertIsInstance(result, types.GeneratorType)
        self.assertEqual([t["taskId"] for t in result], ["t1"])

    def test_find_many_no_match_is_empty(self):
        self.assertEqual(list(self.store.find_many(EntityKind.TASK, {"list": "missing"})), [])

    def test_returned_records_are_copies(self):
        task_id = self.store.insert(EntityKind.TASK, self._task("t1"))
        found = self.store.find_one(EntityKind.TASK, {"id": task_id})
        found["done"] = True
        self.assertFalse(self.store.find_one(EntityKind.TASK, {"id": task_id})["done"])

    def test_update_first_match(self):
        self.store.insert(EntityKind.TASK, self._task("t1"))
        updated = self.store.update(EntityKind.TASK, {"taskId": "t1"}, {"done": True})
        self.assertTrue(updated["done"])
        self.assertTrue(self.store.find_one(EntityKind.TASK, {"taskId": "t1"})["done"])

    def test_update_not_found_returns_none(self):
        self.assertIsNone(self.store.update(EntityKind.TASK, {"taskId": "nope"}, {"done": True}))

    def test_update_enforces_uniqueness(self):
        self.store.insert(EntityKind.TASK, self._task("t1"))
        self.store.insert(EntityKind.TASK, self._task("t2"))
        with self.assertRaises(DuplicateKey):
            self.store.update(EntityKind.TASK, {"taskId": "t2"}, {"taskId": "t1"})

    def test_delete_one_and_many(self):
        self.store.insert(EntityKind.TASK, self._task("t1"))
        self.store.insert(EntityKind.TASK, self._task("t2"))
        self.store.insert(EntityKind.TASK, self._task("t3", list_id="list-2"))

        self.assertEqual(self.store.delete_one(EntityKind.TASK, {"taskId": "t1"}), 1)
        self.assertEqual(self.store.delete_one(EntityKind.TASK, {"taskId": "t1"}), 0)
        self.assertEqual(self.store.delete_many(EntityKind.TASK, {"list": "list-1"}), 1)
        self.assertEqual(self.store.delete_many(EntityKind.TASK, {"list": "list-1"}), 0)
        self.assertEqual(len(list(self.store.find_many(EntityKind.TASK, {}))), 1)

    def test_is_valid_id(self):
        self.assertFalse(self.store.is_valid_id("not-a-valid-id"))
        self.assertFalse(self.store.is_valid_id(None))
        self.assertTrue(self.store.is_valid_id("0b8f5a0e-6c3e-4f51-9d7e-2f6f1c2b9a11"))
