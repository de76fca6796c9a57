"""
Use case: Partially update a task.

Input: UpdateTaskCommand (task_id, patch)
Output: TaskResult
Side effects: Persists the changed task; completed_at follows status changes.
Failure cases: TaskNotFoundError, InvalidReferenceError.
"""

import logging
from datetime import datetime
from typing import Callable

from todo_api.application.todo.create_task import ensure_assignee_exists
from todo_api.application.todo.dtos import TaskResult, UpdateTaskCommand
from todo_api.domain.todo.errors import TaskNotFoundError
from todo_api.domain.todo.ports import TaskRepository, UserRepository
from todo_api.domain.todo.task_lifecycle import apply_patch, utc_now

logger = logging.getLogger(__name__)


class UpdateTaskUseCase:
    """Orchestrates a partial task update.

    Only fields present in the patch are applied. The completion
    timestamp is touched only when the status actually changes.
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        user_repo: UserRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._user_repo = user_repo
        self._clock = clock

    def execute(self, command: UpdateTaskCommand) -> TaskResult:
        """Run the update task use case.

        Raises:
            TaskNotFoundError: If the task does not exist.
            InvalidReferenceError: If a new assignee does not resolve to a user.
        """
        task = self._task_repo.get_by_id(command.task_id)
        if task is None:
            raise TaskNotFoundError(command.task_id)

        patch = command.patch
        if patch.is_set("assigned_to") and patch.assigned_to is not None:
            ensure_assignee_exists(self._user_repo, patch.assigned_to)

        updated = apply_patch(task, patch, self._clock())
        saved = self._task_repo.save(updated)
        logger.info(
            "Updated task id=%s fields=%s",
            saved.id,
            sorted(patch.present_fields()),
        )
        return TaskResult.from_entity(saved)
