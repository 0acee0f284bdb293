"""
Lists API endpoints.

Lists are addressed by (creator, name); tasks by their store id for deletes
and by their caller-supplied taskId for updates.
"""
from typing import List

from django.http import HttpRequest
from ninja import Router

from apps.identity.dtos import MessageOut
from .dtos import TaskListIn, TaskListOut, TaskIn, TaskDoneIn, TaskOut
from .services import (
    create_list,
    list_all_lists,
    delete_list,
    create_task,
    update_task_done,
    delete_task,
    list_tasks_for_list,
)

router = Router(tags=["Lists"])


# =============================================================================
# List Endpoints
# =============================================================================

@router.post("/lists", response=MessageOut)
def create_list_api(request: HttpRequest, payload: TaskListIn):
    create_list(request.store, payload.name, payload.creator, payload.shared)
    return {"message": "List created successfully"}


@router.get("/lists", response=List[TaskListOut])
def get_lists_api(request: HttpRequest):
    return list_all_lists(request.store)


@router.delete("/lists/{username}/{name}", response=MessageOut)
def delete_list_api(request: HttpRequest, username: str, name: str):
    """
    Delete a list and every task in it.

    500 if the cascade fails part way; see services.delete_list.
    """
    delete_list(request.store, username, name)
    return {"message": "List deleted successfully"}


# =============================================================================
# Task Endpoints
# =============================================================================

@router.post("/tasks", response=MessageOut)
def create_task_api(request: HttpRequest, payload: TaskIn):
    create_task(request.store, payload.name, payload.list, payload.done, payload.taskId)
    return {"message": "Task created successfully"}


@router.put("/tasks")
def update_task_api(request: HttpRequest, payload: TaskDoneIn):
    """
    Set the done flag. Responds with the updated task, or null when no
    task has that taskId.
    """
    return update_task_done(request.store, payload.taskId, payload.done)


# GET and DELETE share one path pattern: `key` is the list name for GET and
# the task's store id for DELETE.
@router.get("/tasks/{key}", response=List[TaskOut])
def get_tasks_api(request: HttpRequest, key: str):
    """List every task in the list named `key`."""
    return list_tasks_for_list(request.store, key)


@router.delete("/tasks/{key}", response=MessageOut)
def delete_task_api(request: HttpRequest, key: str):
    """Delete the task whose store id is `key`."""
    delete_task(request.store, key)
    return {"message": "Task deleted successfully"}
