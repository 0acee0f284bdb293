"""
Services for Lists app.

Enforces the rules between lists and tasks that the entity store cannot
express on its own:
- a task must reference an existing list when it is created
- deleting a list removes its tasks first (cascade)

Every function receives the store explicitly. Nothing here spans a
transaction; each store call is atomic on its own.
"""
import logging
from typing import List, Optional

from apps.core.errors import Conflict, InternalError, InvalidArgument, NotFound
from apps.core.store import (
    DuplicateKey,
    EntityKind,
    EntityStoreInterface,
    Record,
    StoreError,
)
from apps.core.validation import require_bool, require_text

logger = logging.getLogger(__name__)


# =============================================================================
# Lists
# =============================================================================

def create_list(store: EntityStoreInterface, name, creator, shared) -> Record:
    """
    Create a list. The creator is not checked against registered users.
    """
    require_text('name', name)
    require_text('creator', creator)
    require_bool('shared', shared)

    record = {'name': name, 'creator': creator, 'shared': shared}
    list_id = store.insert(EntityKind.LIST, record)
    logger.info(f"Created list {name!r} for {creator} ({list_id})")
    return {**record, 'id': list_id}


def list_all_lists(store: EntityStoreInterface) -> List[Record]:
    return list(store.find_many(EntityKind.LIST, {}))


def delete_list(store: EntityStoreInterface, username, name) -> int:
    """
    Delete the list `name` owned by `username` together with its tasks.

    Two sequential store calls: tasks first, then the list.
    - If removing the tasks fails, the list is left alone.
    - If the tasks are gone but removing the list fails, the list stays
      behind without tasks. No compensation is attempted.
    Both failures are reported as InternalError.

    Returns:
        Number of tasks removed by the cascade.
    """
    require_text('username', username)
    require_text('name', name)

    task_list = store.find_one(EntityKind.LIST, {'name': name, 'creator': username})
    if task_list is None:
        raise NotFound("List not found")

    list_id = task_list['id']

    try:
        removed = store.delete_many(EntityKind.TASK, {'list': list_id})
    except StoreError as e:
        logger.exception(f"Cascade delete of tasks for list {list_id} failed: {e}")
        raise InternalError()

    try:
        deleted = store.delete_one(EntityKind.LIST, {'id': list_id})
    except StoreError as e:
        logger.exception(
            f"Removed {removed} task(s) but deleting list {list_id} failed: {e}"
        )
        raise InternalError()

    if not deleted:
        logger.warning(f"List {list_id} disappeared before it could be deleted")

    logger.info(f"Deleted list {name!r} of {username} and {removed} task(s)")
    return removed


# =============================================================================
# Tasks
# =============================================================================

def _resolve_list(store: EntityStoreInterface, list_name) -> Record:
    task_list = store.find_one(EntityKind.LIST, {'name': list_name})
    if task_list is None:
        raise NotFound("List not found")
    return task_list


def create_task(store: EntityStoreInterface, name, list_name, done, task_id) -> Record:
    """
    Create a task in the list called `list_name`.

    Raises:
        NotFound: No list has that name
        Conflict: `task_id` is already used by another task
    """
    require_text('name', name)
    require_text('list', list_name)
    require_bool('done', done)
    require_text('taskId', task_id)

    task_list = _resolve_list(store, list_name)

    if store.find_one(EntityKind.TASK, {'taskId': task_id}):
        raise Conflict("Task already exists")

    record = {'name': name, 'list': task_list['id'], 'done': done, 'taskId': task_id}
    try:
        new_id = store.insert(EntityKind.TASK, record)
    except DuplicateKey:
        raise Conflict("Task already exists")

    logger.info(f"Created task {task_id} in list {task_list['id']}")
    return {**record, 'id': new_id}


def update_task_done(store: EntityStoreInterface, task_id, done) -> Optional[Record]:
    """
    Set `done` on the task with external id `task_id`.

    Returns the updated task, or None when no task matches.
    """
    require_text('taskId', task_id)
    require_bool('done', done)

    return store.update(EntityKind.TASK, {'taskId': task_id}, {'done': done})


def delete_task(store: EntityStoreInterface, id) -> None:
    """Delete a task by its store-assigned id."""
    if not store.is_valid_id(id):
        raise InvalidArgument("Invalid task ID")

    try:
        deleted = store.delete_one(EntityKind.TASK, {'id': id})
    except StoreError as e:
        logger.exception(f"Deleting task {id} failed: {e}")
        raise InternalError()

    if not deleted:
        raise NotFound("Task not found")

    logger.info(f"Deleted task {id}")


def list_tasks_for_list(store: EntityStoreInterface, list_name) -> List[Record]:
    task_list = _resolve_list(store, list_name)
    return list(store.find_many(EntityKind.TASK, {'list': task_list['id']}))
