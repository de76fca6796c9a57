"""
Use case: Mark a task as done.

Input: CompleteTaskCommand (task_id)
Output: TaskResult
Side effects: Sets status "done" and stamps completed_at with the current
time, on every call.
Failure cases: TaskNotFoundError.
"""

import logging
from datetime import datetime
from typing import Callable

from todo_api.application.todo.dtos import CompleteTaskCommand, TaskResult
from todo_api.domain.todo.errors import TaskNotFoundError
from todo_api.domain.todo.ports import TaskRepository
from todo_api.domain.todo.task_lifecycle import complete, utc_now

logger = logging.getLogger(__name__)


class CompleteTaskUseCase:
    """Shortcut transition into "done" from any status."""

    def __init__(
        self,
        task_repo: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._clock = clock

    def execute(self, command: CompleteTaskCommand) -> TaskResult:
        """Run the complete task use case.

        Raises:
            TaskNotFoundError: If the task does not exist.
        """
        task = self._task_repo.get_by_id(command.task_id)
        if task is None:
            raise TaskNotFoundError(command.task_id)

        saved = self._task_repo.save(complete(task, self._clock()))
        logger.info("Completed task id=%s", saved.id)
        return TaskResult.from_entity(saved)
