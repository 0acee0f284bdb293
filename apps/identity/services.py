"""Services for Identity app."""
import logging

from apps.core.errors import Conflict, Unauthorized
from apps.core.store import DuplicateKey, EntityKind, EntityStoreInterface
from apps.core.validation import require_text
from .dtos import UserDTO

logger = logging.getLogger(__name__)


def _to_dto(record) -> UserDTO:
    return UserDTO(id=record['id'], username=record['username'], email=record['email'])


def register_user(store: EntityStoreInterface, username, password, email) -> UserDTO:
    require_text('username', username)
    require_text('password', password)
    require_text('email', email)

    if store.find_one(EntityKind.USER, {'username': username}):
        raise Conflict("User already exists")

    try:
        user_id = store.insert(EntityKind.USER, {
            'username': username,
            'password': password,
            'email': email,
        })
    except DuplicateKey:
        # Lost a race with a concurrent registration
        raise Conflict("User already exists")

    logger.info(f"Registered user {username} ({user_id})")
    return UserDTO(id=user_id, username=username, email=email)


def authenticate(store: EntityStoreInterface, username, password) -> UserDTO:
    require_text('username', username)
    require_text('password', password)

    user = store.find_one(EntityKind.USER, {'username': username, 'password': password})
    if user is None:
        logger.info(f"Failed login for {username}")
        raise Unauthorized("Invalid username or password")

    return _to_dto(user)
