"""
Integration tests for list and task API endpoints.
Tests status codes, response bodies and end-to-end flows.
"""
import json
from unittest import mock

from django.test import TestCase, Client, override_settings

from apps.core.backends.django_backend import DjangoEntityStore
from apps.core.store import StoreError, clear_store_cache
from apps.lists.models import Task, TaskList


class ListsAPITest(TestCase):
    """Test list and task endpoints against the Django store."""

    def setUp(self):
        self.client = Client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type='application/json')

    def _put(self, path, payload):
        return self.client.put(path, data=json.dumps(payload), content_type='application/json')

    def _create_list(self, name="Groceries", creator="alice", shared=False):
        return self._post('/lists', {'name': name, 'creator': creator, 'shared': shared})

    def _create_task(self, name="Milk", list_name="Groceries", done=False, task_id="t1"):
        return self._post('/tasks', {'name': name, 'list': list_name, 'done': done, 'taskId': task_id})

    def test_root_probe(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertIn('<h1>', response.content.decode())

    def test_create_and_get_lists(self):
        response = self._create_list()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'List created successfully'})

        response = self.client.get('/lists')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['name'], 'Groceries')
        self.assertEqual(data[0]['creator'], 'alice')
        self.assertFalse(data[0]['shared'])
        self.assertEqual(data[0]['id'], str(TaskList.objects.get().id))

    def test_create_list_missing_field(self):
        response = self._post('/lists', {'name': 'Groceries', 'shared': False})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(TaskList.objects.exists())

    def test_create_list_wrongly_typed_shared(self):
        for shared in ('yes', 'maybe', 1):
            response = self._create_list(shared=shared)
            self.assertEqual(response.status_code, 400, shared)
            self.assertEqual(response.json(), {'message': "Invalid value for field 'shared'"})
        self.assertFalse(TaskList.objects.exists())

    def test_create_task_wrongly_typed_fields(self):
        self._create_list()

        response = self._create_task(done=0)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'message': "Invalid value for field 'done'"})

        response = self._create_task(task_id=5)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'message': "Invalid value for field 'taskId'"})

        self.assertFalse(Task.objects.exists())

    def test_update_task_wrongly_typed_done(self):
        self._create_list()
        self._create_task()
        response = self._put('/tasks', {'taskId': 't1', 'done': 'true'})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Task.objects.get(task_id='t1').done)

    def test_form_encoded_bodies(self):
        form = 'application/x-www-form-urlencoded'
        response = self.client.post('/lists', 'name=Groceries&creator=alice&shared=true', content_type=form)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(TaskList.objects.get().shared)

        response = self.client.post('/tasks', 'name=Milk&list=Groceries&done=false&taskId=t1', content_type=form)
        self.assertEqual(response.status_code, 200)

        response = self.client.put('/tasks', 'taskId=t1&done=true', content_type=form)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['done'])

    def test_form_encoded_non_boolean_is_rejected(self):
        response = self.client.post(
            '/lists', 'name=Groceries&creator=alice&shared=maybe',
            content_type='application/x-www-form-urlencoded',
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_list_not_found(self):
        response = self.client.delete('/lists/alice/Groceries')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'message': 'List not found'})

    def test_delete_list_cascade_failure(self):
        self._create_list()
        self._create_task()

        with mock.patch.object(DjangoEntityStore, 'delete_many', side_effect=StoreError('down')):
            response = self.client.delete('/lists/alice/Groceries')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Internal Server Error'})
        self.assertTrue(TaskList.objects.exists())
        self.assertTrue(Task.objects.exists())

    def test_delete_list_fails_after_cascade(self):
        self._create_list()
        self._create_task()

        with mock.patch.object(DjangoEntityStore, 'delete_one', side_effect=StoreError('down')):
            response = self.client.delete('/lists/alice/Groceries')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Internal Server Error'})
        # Tasks are gone, the list stays behind
        self.assertFalse(Task.objects.exists())
        self.assertTrue(TaskList.objects.filter(name='Groceries').exists())

    def test_create_task_missing_list(self):
        response = self._create_task(list_name='Nowhere')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'message': 'List not found'})
        self.assertFalse(Task.objects.exists())

    def test_create_task_duplicate_task_id(self):
        self._create_list()
        self._create_task()
        response = self._create_task(name='Bread')
        self.assertEqual(response.status_code, 409)

    def test_update_unknown_task_returns_null(self):
        response = self._put('/tasks', {'taskId': 'missing', 'done': True})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

    def test_delete_task(self):
        self._create_list()
        self._create_task()
        task = Task.objects.get(task_id='t1')

        response = self.client.delete(f'/tasks/{task.id}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Task deleted successfully'})

        response = self.client.delete(f'/tasks/{task.id}')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'message': 'Task not found'})

    def test_delete_task_invalid_id(self):
        response = self.client.delete('/tasks/not-a-valid-id')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'message': 'Invalid task ID'})

    def test_get_tasks_missing_list(self):
        response = self.client.get('/tasks/Nowhere')
        self.assertEqual(response.status_code, 404)

    def test_unexpected_error_is_internal(self):
        with mock.patch('apps.lists.api.list_all_lists', side_effect=RuntimeError('boom')):
            response = self.client.get('/lists')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Internal Server Error'})

    def test_groceries_flow(self):
        """Create, read, update and cascade delete a list end to end."""
        self.assertEqual(self._create_list().status_code, 200)
        response = self._create_task()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Task created successfully'})

        response = self.client.get('/tasks/Groceries')
        self.assertEqual(response.status_code, 200)
        tasks = response.json()
        self.assertEqual(len(tasks), 1)
        self.assertEqual(tasks[0]['name'], 'Milk')
        self.assertFalse(tasks[0]['done'])
        self.assertEqual(tasks[0]['taskId'], 't1')
        self.assertEqual(tasks[0]['list'], str(TaskList.objects.get().id))

        response = self._put('/tasks', {'taskId': 't1', 'done': True})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['done'])
        self.assertEqual(response.json()['taskId'], 't1')

        response = self.client.delete('/lists/alice/Groceries')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'List deleted successfully'})
        self.assertFalse(Task.objects.exists())

        response = self.client.get('/tasks/Groceries')
        self.assertEqual(response.status_code, 404)


@override_settings(ENTITY_STORE_BACKEND='apps.core.backends.memory_backend.InMemoryEntityStore')
class ListsAPIMemoryStoreTest(TestCase):
    """Same endpoints with the in-memory store swapped in."""

    def setUp(self):
        clear_store_cache()
        self.client = Client()

    def test_flow_does_not_touch_database(self):
        self.client.post(
            '/lists',
            data=json.dumps({'name': 'Chores', 'creator': 'bob', 'shared': True}),
            content_type='application/json',
        )
        self.client.post(
            '/tasks',
            data=json.dumps({'name': 'Sweep', 'list': 'Chores', 'done': False, 'taskId': 'c1'}),
            content_type='application/json',
        )

        response = self.client.get('/tasks/Chores')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t['taskId'] for t in response.json()], ['c1'])
        self.assertFalse(TaskList.objects.exists())
        self.assertFalse(Task.objects.exists())

        response = self.client.delete('/lists/bob/Chores')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get('/tasks/Chores').status_code, 404)
