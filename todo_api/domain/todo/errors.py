"""
Domain-specific errors for the todo bounded context.

All operational errors raised by use cases are defined here.
Each carries an ErrorKind; the interface layer maps kinds to HTTP
responses. No framework imports allowed.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Taxonomy of operational failures."""

    VALIDATION_FAILED = "validation_failed"
    DUPLICATE = "duplicate"
    INVALID_REFERENCE = "invalid_reference"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


class ToDoError(Exception):
    """Base error for all todo domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationFailedError(ToDoError):
    """Raised when an inbound payload violates one or more rules.

    Attributes:
        errors: Every violation found, as {field, message, value} dicts.
    """

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        errors: Optional[list[dict[str, Any]]] = None,
        message: str = "Validation errors detected",
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class DuplicateError(ToDoError):
    """Raised when a unique attribute is already taken."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} already in use")
        self.field = field


class InvalidReferenceError(ToDoError):
    """Raised when a foreign identifier does not resolve to a record."""

    kind = ErrorKind.INVALID_REFERENCE

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"The user referenced by {field} does not exist")
        self.field = field
        self.value = value


class MissingTokenError(ToDoError):
    """Raised when a protected operation is called without a bearer token."""

    kind = ErrorKind.MISSING_TOKEN

    def __init__(self) -> None:
        super().__init__("Not authorized, no token")


class InvalidTokenError(ToDoError):
    """Raised when a bearer token is malformed, forged or orphaned."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(self, message: str = "Not authorized, invalid token") -> None:
        super().__init__(message)


class ExpiredTokenError(ToDoError):
    """Raised when a bearer token is past its expiry."""

    kind = ErrorKind.EXPIRED_TOKEN

    def __init__(self) -> None:
        super().__init__("Not authorized, token expired")


class InvalidCredentialsError(ToDoError):
    """Raised on a failed login, whatever the reason."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class NotFoundError(ToDoError):
    """Raised when a resource cannot be found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "Resource", identifier: str = "") -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.identifier = identifier


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


class TaskNotFoundError(NotFoundError):
    """Raised when a task cannot be found."""

    def __init__(self, task_id: str) -> None:
        super().__init__("Task", task_id)


class RateLimitedError(ToDoError):
    """Reserved for callers exceeding a request quota."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self) -> None:
        super().__init__("Too many requests, please try again later")
