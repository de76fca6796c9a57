"""
Data Transfer Objects for the todo application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior beyond mapping from entities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from todo_api.domain.todo.entities import Task, TaskStatus, User, UserSummary
from todo_api.domain.todo.task_lifecycle import TaskPatch


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for registering a user.

    Attributes:
        username: Trimmed username, at least 3 characters.
        email: Trimmed, lowercased email address.
        password: Plaintext password; hashed before it reaches the store.
    """

    username: str
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class LoginCommand:
    """Input DTO for exchanging credentials for a token."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class GetUserProfileQuery:
    user_id: str


@dataclass(frozen=True)
class UserResult:
    """Output DTO for a user. Never carries the password hash."""

    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResult":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class AuthResult:
    """Output DTO for register and login: the user and a fresh bearer token."""

    user: UserResult
    token: str = field(repr=False)


@dataclass(frozen=True)
class CreateTaskCommand:
    """Input DTO for creating a task.

    Attributes:
        title: Trimmed title, 1-100 characters.
        description: Optional trimmed description, up to 500 characters.
        due_date: Optional due date.
        assigned_to: Optional id of the user the task is assigned to.
    """

    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None


@dataclass(frozen=True)
class ListTasksQuery:
    """Input DTO for listing tasks with equality filters."""

    status: Optional[TaskStatus] = None
    assigned_to: Optional[str] = None


@dataclass(frozen=True)
class GetTaskQuery:
    task_id: str


@dataclass(frozen=True)
class UpdateTaskCommand:
    """Input DTO for a partial task update.

    Attributes:
        task_id: Id of the task to update.
        patch: Fields explicitly present in the request.
    """

    task_id: str
    patch: TaskPatch


@dataclass(frozen=True)
class DeleteTaskCommand:
    task_id: str


@dataclass(frozen=True)
class CompleteTaskCommand:
    task_id: str


@dataclass(frozen=True)
class AssigneeResult:
    """Lightweight projection of the user a task is assigned to."""

    id: str
    username: str
    email: str

    @classmethod
    def from_entity(cls, summary: UserSummary) -> "AssigneeResult":
        return cls(id=summary.id, username=summary.username, email=summary.email)


@dataclass(frozen=True)
class TaskResult:
    """Output DTO for a task.

    assigned_to is the resolved assignee projection, or None when the task
    is unassigned or its assignee no longer exists.
    """

    id: str
    title: str
    description: Optional[str]
    status: str
    due_date: Optional[datetime]
    assigned_to: Optional[AssigneeResult]
    completed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResult":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            due_date=task.due_date,
            assigned_to=(
                AssigneeResult.from_entity(task.assignee) if task.assignee else None
            ),
            completed_at=task.completed_at,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
