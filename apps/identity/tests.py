import json

from django.test import SimpleTestCase, TestCase, Client

from apps.core.backends.memory_backend import InMemoryEntityStore
from apps.core.errors import Conflict, InvalidArgument, Unauthorized
from apps.core.store import EntityKind
from .models import User
from .services import register_user, authenticate


class RegistrationTest(SimpleTestCase):
    def setUp(self):
        self.store = InMemoryEntityStore()

    def test_register_then_authenticate(self):
        user = register_user(self.store, "alice", "secret", "alice@example.com")
        self.assertEqual(user.username, "alice")

        logged_in = authenticate(self.store, "alice", "secret")
        self.assertEqual(logged_in.id, user.id)

    def test_wrong_password(self):
        register_user(self.store, "alice", "secret", "alice@example.com")
        with self.assertRaises(Unauthorized):
            authenticate(self.store, "alice", "wrong")

    def test_unknown_user(self):
        with self.assertRaises(Unauthorized):
            authenticate(self.store, "ghost", "secret")

    def test_duplicate_username_conflicts_once(self):
        outcomes = []
        for email in ("a@example.com", "b@example.com"):
            try:
                register_user(self.store, "alice", "pw", email)
                outcomes.append("ok")
            except Conflict:
                outcomes.append("conflict")

        self.assertEqual(sorted(outcomes), ["conflict", "ok"])
        self.assertEqual(len(list(self.store.find_many(EntityKind.USER, {"username": "alice"}))), 1)

    def test_missing_fields(self):
        with self.assertRaises(InvalidArgument):
            register_user(self.store, "alice", "", "alice@example.com")
        with self.assertRaises(InvalidArgument):
            register_user(self.store, "alice", "pw", None)
        self.assertIsNone(self.store.find_one(EntityKind.USER, {"username": "alice"}))


class IdentityAPITest(TestCase):
    def setUp(self):
        self.client = Client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type='application/json')

    def test_create_user(self):
        response = self._post('/users', {'username': 'alice', 'password': 'pw', 'email': 'a@example.com'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'User created successfully'})
        self.assertEqual(User.objects.get().password, 'pw')

    def test_create_user_twice(self):
        payload = {'username': 'alice', 'password': 'pw', 'email': 'a@example.com'}
        self._post('/users', payload)
        response = self._post('/users', payload)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {'message': 'User already exists'})
        self.assertEqual(User.objects.count(), 1)

    def test_login(self):
        self._post('/users', {'username': 'alice', 'password': 'pw', 'email': 'a@example.com'})

        response = self._post('/login', {'username': 'alice', 'password': 'pw'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Login successful'})

        response = self._post('/login', {'username': 'alice', 'password': 'nope'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'message': 'Invalid username or password'})

    def test_login_missing_password(self):
        response = self._post('/login', {'username': 'alice'})
        self.assertEqual(response.status_code, 400)

    def test_login_wrongly_typed_username(self):
        response = self._post('/login', {'username': 42, 'password': 'pw'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'message': "Invalid value for field 'username'"})

    def test_create_user_form_encoded(self):
        response = self.client.post(
            '/users', 'username=alice&password=pw&email=a%40example.com',
            content_type='application/x-www-form-urlencoded',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(User.objects.get().email, 'a@example.com')
