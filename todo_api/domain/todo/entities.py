"""
Domain entities for the todo bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TaskStatus(Enum):
    """Lifecycle state of a task. Every state is reachable from every other."""

    TODO = "to-do"
    IN_PROGRESS = "in-progress"
    DONE = "done"


@dataclass(frozen=True)
class User:
    """A registered user.

    password_hash is only populated when credentials were explicitly
    requested for verification; read paths leave it None.
    """

    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: Optional[str] = None


@dataclass(frozen=True)
class UserSummary:
    """Lightweight projection of a user, used to resolve task assignees."""

    id: str
    username: str
    email: str


@dataclass(frozen=True)
class Task:
    """A unit of work in the shared ToDo list.

    Invariant: completed_at is set if and only if status is DONE.
    assigned_to is a non-owning reference to a User id; assignee is the
    resolved projection, filled in by the store on reads.
    """

    id: str
    title: str
    description: Optional[str]
    status: TaskStatus
    due_date: Optional[datetime]
    assigned_to: Optional[str]
    completed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    assignee: Optional[UserSummary] = None


@dataclass(frozen=True)
class TokenClaims:
    """Verified content of a bearer token."""

    user_id: str
