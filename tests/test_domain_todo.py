"""
Tests for the todo domain layer.

Tests task lifecycle rules and error classes in isolation.
No external dependencies or IO required.
"""

from datetime import datetime, timedelta, timezone

import pytest

from todo_api.domain.todo.entities import Task, TaskStatus, UserSummary
from todo_api.domain.todo.errors import (
    DuplicateError,
    ErrorKind,
    InvalidCredentialsError,
    InvalidReferenceError,
    TaskNotFoundError,
    ValidationFailedError,
)
from todo_api.domain.todo.task_lifecycle import (
    UNSET,
    TaskPatch,
    apply_patch,
    complete,
    transition_status,
)

CREATED = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)
EARLIER = datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc)


def _task(status: TaskStatus = TaskStatus.TODO, completed_at=None, **overrides) -> Task:
    values = dict(
        id="a" * 32,
        title="Write report",
        description="Quarterly numbers",
        status=status,
        due_date=None,
        assigned_to=None,
        completed_at=completed_at,
        created_at=CREATED,
        updated_at=CREATED,
    )
    values.update(overrides)
    return Task(**values)


class TestStatusTransitions:
    """completed_at follows status changes, and only status changes."""

    @pytest.mark.parametrize("start", [TaskStatus.TODO, TaskStatus.IN_PROGRESS])
    def test_moving_to_done_sets_completed_at(self, start):
        task = apply_patch(_task(start), TaskPatch(status=TaskStatus.DONE), NOW)
        assert task.status is TaskStatus.DONE
        assert task.completed_at == NOW

    @pytest.mark.parametrize("target", [TaskStatus.TODO, TaskStatus.IN_PROGRESS])
    def test_moving_away_from_done_clears_completed_at(self, target):
        done = _task(TaskStatus.DONE, completed_at=EARLIER)
        task = apply_patch(done, TaskPatch(status=target), NOW)
        assert task.status is target
        assert task.completed_at is None

    def test_same_status_keeps_completed_at(self):
        done = _task(TaskStatus.DONE, completed_at=EARLIER)
        task = apply_patch(done, TaskPatch(status=TaskStatus.DONE, title="Renamed"), NOW)
        assert task.completed_at == EARLIER
        assert task.title == "Renamed"

    def test_same_status_without_completion_stays_empty(self):
        task = apply_patch(
            _task(TaskStatus.IN_PROGRESS),
            TaskPatch(status=TaskStatus.IN_PROGRESS, description="more"),
            NOW,
        )
        assert task.completed_at is None

    def test_status_accepts_raw_value(self):
        task = apply_patch(_task(), TaskPatch(status="done"), NOW)
        assert task.status is TaskStatus.DONE

    def test_transition_to_current_status_is_identity(self):
        task = _task(TaskStatus.IN_PROGRESS)
        assert transition_status(task, TaskStatus.IN_PROGRESS, NOW) is task


class TestPartialUpdate:
    """Only fields present in the patch are applied."""

    def test_empty_patch_only_touches_updated_at(self):
        original = _task(due_date=EARLIER, assigned_to="b" * 32)
        task = apply_patch(original, TaskPatch(), NOW)
        assert task.title == original.title
        assert task.description == original.description
        assert task.due_date == EARLIER
        assert task.assigned_to == "b" * 32
        assert task.updated_at == NOW

    def test_explicit_empty_description_is_applied(self):
        task = apply_patch(_task(), TaskPatch(description=""), NOW)
        assert task.description == ""

    def test_explicit_none_clears_optional_fields(self):
        original = _task(due_date=EARLIER, assigned_to="b" * 32)
        task = apply_patch(
            original, TaskPatch(description=None, due_date=None, assigned_to=None), NOW
        )
        assert task.description is None
        assert task.due_date is None
        assert task.assigned_to is None

    def test_reassignment_drops_stale_assignee_projection(self):
        original = _task(
            assigned_to="b" * 32,
            assignee=UserSummary(id="b" * 32, username="bob", email="bob@example.com"),
        )
        task = apply_patch(original, TaskPatch(assigned_to="c" * 32), NOW)
        assert task.assigned_to == "c" * 32
        assert task.assignee is None

    def test_empty_title_rejected(self):
        with pytest.raises(ValueError):
            apply_patch(_task(), TaskPatch(title=""), NOW)

    def test_null_status_rejected(self):
        with pytest.raises(ValueError):
            apply_patch(_task(), TaskPatch(status=None), NOW)

    def test_input_task_not_modified(self):
        original = _task()
        apply_patch(original, TaskPatch(title="Other", status=TaskStatus.DONE), NOW)
        assert original.title == "Write report"
        assert original.status is TaskStatus.TODO

    def test_present_fields(self):
        patch = TaskPatch(title="x", due_date=None)
        assert patch.present_fields() == {"title": "x", "due_date": None}
        assert patch.is_set("due_date")
        assert not patch.is_set("status")
        assert patch.status is UNSET


class TestComplete:
    """complete() is a shortcut into done from any status."""

    @pytest.mark.parametrize("start", list(TaskStatus))
    def test_complete_from_any_status(self, start):
        task = complete(_task(start, completed_at=EARLIER if start is TaskStatus.DONE else None), NOW)
        assert task.status is TaskStatus.DONE
        assert task.completed_at == NOW

    def test_repeated_complete_advances_timestamp(self):
        first = complete(_task(), NOW)
        later = NOW + timedelta(minutes=5)
        second = complete(first, later)
        assert second.completed_at == later
        assert second.updated_at == later


class TestDomainErrors:
    """Error classes carry their kind and a readable message."""

    def test_duplicate_error_names_field(self):
        error = DuplicateError("email")
        assert error.kind is ErrorKind.DUPLICATE
        assert "email" in error.message

    def test_task_not_found_error(self):
        error = TaskNotFoundError("abc")
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.message == "Task not found"
        assert error.identifier == "abc"

    def test_invalid_reference_error(self):
        error = InvalidReferenceError("assignedTo", "abc")
        assert error.kind is ErrorKind.INVALID_REFERENCE
        assert "assignedTo" in error.message

    def test_validation_failed_defaults_to_empty_details(self):
        assert ValidationFailedError().errors == []

    def test_invalid_credentials_message_is_generic(self):
        assert InvalidCredentialsError().message == "Invalid email or password"
