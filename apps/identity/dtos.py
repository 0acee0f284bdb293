"""DTOs for Identity app."""
from dataclasses import dataclass
from typing import Optional

from ninja import Schema
from pydantic import StrictStr


@dataclass(frozen=True)
class UserDTO:
    id: str
    username: str
    email: str


class UserCreate(Schema):
    username: Optional[StrictStr] = None
    password: Optional[StrictStr] = None
    email: Optional[StrictStr] = None


class LoginSchema(Schema):
    username: Optional[StrictStr] = None
    password: Optional[StrictStr] = None


class MessageOut(Schema):
    message: str
