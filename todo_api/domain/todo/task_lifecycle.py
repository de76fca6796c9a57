"""
Task lifecycle rules.

Pure functions computing the next state of a task. The status machine
has three states, all mutually reachable; the only derived behavior is
the completion timestamp:

- moving into "done" sets completed_at,
- moving out of "done" clears it,
- keeping the same status leaves it untouched.

Partial updates use explicit presence: a TaskPatch field left at UNSET
is not applied, anything else (including None) is.
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from typing import Any, Optional

from todo_api.domain.todo.entities import Task, TaskStatus


class _Unset:
    """Marker for a field absent from a patch."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NewTask:
    """Fields accepted when creating a task."""

    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None


@dataclass(frozen=True)
class TaskPatch:
    """A partial update. Fields left at UNSET are not touched.

    title and status cannot be cleared; description, due_date and
    assigned_to are cleared by an explicit None.
    """

    title: Any = UNSET
    description: Any = UNSET
    status: Any = UNSET
    due_date: Any = UNSET
    assigned_to: Any = UNSET

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def present_fields(self) -> dict[str, Any]:
        """Return only the fields explicitly present in the patch."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


def transition_status(task: Task, status: TaskStatus, now: datetime) -> Task:
    """Move a task to a status, maintaining completed_at.

    A transition to the current status is a no-op: completed_at keeps
    whatever value it had.
    """
    if status is task.status:
        return task
    completed_at = now if status is TaskStatus.DONE else None
    return replace(task, status=status, completed_at=completed_at)


def apply_patch(task: Task, patch: TaskPatch, now: datetime) -> Task:
    """Apply a partial update to a task.

    Args:
        task: Current stored state.
        patch: Fields to change.
        now: Timestamp used for completed_at and updated_at.

    Returns:
        The updated task. The input is not modified.

    Raises:
        ValueError: If the patch tries to clear title or status.
    """
    changes = patch.present_fields()
    status = changes.pop("status", UNSET)

    if "title" in changes and not changes["title"]:
        raise ValueError("title cannot be empty")
    if status is None:
        raise ValueError("status cannot be cleared")

    if "assigned_to" in changes and changes["assigned_to"] != task.assigned_to:
        # stale projection; the store resolves the new one on reload
        changes["assignee"] = None

    updated = replace(task, **changes)
    if status is not UNSET:
        updated = transition_status(updated, TaskStatus(status), now)
    return replace(updated, updated_at=now)


def complete(task: Task, now: datetime) -> Task:
    """Mark a task done, stamping completed_at even if it already was."""
    return replace(task, status=TaskStatus.DONE, completed_at=now, updated_at=now)
