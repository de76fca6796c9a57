"""
Pydantic schemas for the todo API request/response validation.

These schemas enforce input validation and define the API contract.
Field names are camelCase on the wire; requests also accept snake_case.
No business logic belongs here.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from todo_api.application.todo.dtos import AssigneeResult, TaskResult, UserResult
from todo_api.domain.todo.entities import TaskStatus
from todo_api.domain.todo.task_lifecycle import TaskPatch

USERNAME_MIN_LEN = 3
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
TITLE_MAX_LEN = 100
DESCRIPTION_MAX_LEN = 500

# local part and domain: ASCII word runs joined by single "." or "-", then a 2-3 char TLD
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=USERNAME_MIN_LEN, max_length=NAME_MAX_LEN
    ),
]
Email = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, to_lower=True, min_length=1, max_length=NAME_MAX_LEN
    ),
]
Title = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LEN)
]
Description = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LEN)
]


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ── Requests ─────────────────────────────────────────────────────


class RegisterUserRequest(CamelModel):
    """Request schema for user registration.

    Attributes:
        username: At least 3 characters after trimming.
        email: A valid email address, trimmed and lowercased.
        password: At least 6 characters.
    """

    username: Username = Field(..., description="Unique username")
    email: Email = Field(..., description="Unique email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, description="Password (6 characters minimum)"
    )

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please provide a valid email")
        return value


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: Email = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Account password")


class CreateTaskRequest(CamelModel):
    """Request schema for task creation.

    Attributes:
        title: 1-100 characters after trimming.
        description: Up to 500 characters after trimming.
        due_date: Optional ISO 8601 due date.
        assigned_to: Optional id of an existing user.
    """

    title: Title = Field(..., description="Task title")
    description: Optional[Description] = Field(default=None, description="Task details")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    assigned_to: Optional[str] = Field(
        default=None, description="Id of the user the task is assigned to"
    )

    @field_validator("assigned_to", mode="before")
    @classmethod
    def blank_assignee_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class UpdateTaskRequest(CamelModel):
    """Request schema for a partial task update.

    Only fields present in the body are applied. description, dueDate
    and assignedTo may be set to null to clear them; title and status
    may not.
    """

    title: Optional[Title] = None
    description: Optional[Description] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None

    @field_validator("assigned_to", mode="before")
    @classmethod
    def blank_assignee_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value

    def to_patch(self) -> TaskPatch:
        """Build a TaskPatch holding only the fields sent by the client."""
        return TaskPatch(**{name: getattr(self, name) for name in self.model_fields_set})


# ── Responses ────────────────────────────────────────────────────


class UserSummaryItem(CamelModel):
    """A user as returned by register and login."""

    id: str
    username: str
    email: str

    @classmethod
    def from_result(cls, result: UserResult) -> "UserSummaryItem":
        return cls(id=result.id, username=result.username, email=result.email)


class UserItem(UserSummaryItem):
    """A user with its timestamps."""

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_result(cls, result: UserResult) -> "UserItem":
        return cls(
            id=result.id,
            username=result.username,
            email=result.email,
            created_at=result.created_at,
            updated_at=result.updated_at,
        )


class AuthResponse(CamelModel):
    """Response schema for register and login."""

    success: bool = True
    user: UserSummaryItem
    token: str


class UserProfileResponse(CamelModel):
    success: bool = True
    user: UserItem


class UserListResponse(CamelModel):
    success: bool = True
    count: int
    users: list[UserItem]


class AssigneeItem(CamelModel):
    """The assigned user, resolved to its public projection."""

    id: str
    username: str
    email: str

    @classmethod
    def from_result(cls, result: AssigneeResult) -> "AssigneeItem":
        return cls(id=result.id, username=result.username, email=result.email)


class TaskItem(CamelModel):
    """A single task in a response."""

    id: str
    title: str
    description: Optional[str] = None
    status: str
    due_date: Optional[datetime] = None
    assigned_to: Optional[AssigneeItem] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_result(cls, result: TaskResult) -> "TaskItem":
        return cls(
            id=result.id,
            title=result.title,
            description=result.description,
            status=result.status,
            due_date=result.due_date,
            assigned_to=(
                AssigneeItem.from_result(result.assigned_to)
                if result.assigned_to
                else None
            ),
            completed_at=result.completed_at,
            created_at=result.created_at,
            updated_at=result.updated_at,
        )


class TaskResponse(CamelModel):
    success: bool = True
    task: TaskItem


class TaskListResponse(CamelModel):
    success: bool = True
    count: int
    tasks: list[TaskItem]


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ValidationErrorItem(CamelModel):
    """One violated rule."""

    field: str
    message: str
    value: Any = None


class ErrorResponse(CamelModel):
    """Error envelope shared by every failing response."""

    success: bool = False
    message: str
    status: int
    timestamp: str
    path: str
    errors: Optional[list[ValidationErrorItem]] = None
    stack: Optional[str] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str
