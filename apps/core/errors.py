"""
Domain errors raised by the service layer.

Each error carries the HTTP status the API layer reports it with, so
services stay free of transport concerns and handlers stay free of
status-code decisions.
"""


class DomainError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Conflict(DomainError):
    """Uniqueness violation (username, taskId)."""
    status_code = 409
    default_message = "Conflict"


class Unauthorized(DomainError):
    status_code = 401
    default_message = "Invalid username or password"


class NotFound(DomainError):
    status_code = 404
    default_message = "Not found"


class InvalidArgument(DomainError):
    status_code = 400
    default_message = "Invalid argument"


class InternalError(DomainError):
    """Unexpected store failure. Details are logged, never returned."""
    status_code = 500
    default_message = "Internal Server Error"
