"""
Identity API endpoints.

Registration and credential checks. No session or token is issued; a
successful login only confirms the credentials match.
"""
from django.http import HttpRequest
from ninja import Router

from .dtos import UserCreate, LoginSchema, MessageOut
from .services import register_user, authenticate

router = Router(tags=["Identity"])


@router.post("/users", response=MessageOut)
def create_user(request: HttpRequest, payload: UserCreate):
    """Register a new user. 409 if the username is taken."""
    register_user(request.store, payload.username, payload.password, payload.email)
    return {"message": "User created successfully"}


@router.post("/login", response=MessageOut)
def login_user(request: HttpRequest, payload: LoginSchema):
    """Check credentials. 401 if no user matches."""
    authenticate(request.store, payload.username, payload.password)
    return {"message": "Login successful"}
