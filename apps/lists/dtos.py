"""
Schemas for Lists app.

Request fields are optional and strict: absent fields reach the services,
which report them as InvalidArgument, and wrongly typed values are rejected
instead of coerced.
"""
from typing import Optional

from ninja import Schema
from pydantic import StrictBool, StrictStr


class TaskListIn(Schema):
    name: Optional[StrictStr] = None
    creator: Optional[StrictStr] = None
    shared: Optional[StrictBool] = None


class TaskListOut(Schema):
    id: str
    name: str
    creator: str
    shared: bool


class TaskIn(Schema):
    name: Optional[StrictStr] = None
    list: Optional[StrictStr] = None  # list name, resolved to its id by the service
    done: Optional[StrictBool] = None
    taskId: Optional[StrictStr] = None


class TaskDoneIn(Schema):
    taskId: Optional[StrictStr] = None
    done: Optional[StrictBool] = None


class TaskOut(Schema):
    id: str
    name: str
    list: str
    done: bool
    taskId: str
