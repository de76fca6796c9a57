"""
Use case: Delete a task.

Input: DeleteTaskCommand (task_id)
Output: None
Side effects: Hard-deletes the task.
Failure cases: TaskNotFoundError.
"""

import logging

from todo_api.application.todo.dtos import DeleteTaskCommand
from todo_api.domain.todo.errors import TaskNotFoundError
from todo_api.domain.todo.ports import TaskRepository

logger = logging.getLogger(__name__)


class DeleteTaskUseCase:
    def __init__(self, task_repo: TaskRepository) -> None:
        self._task_repo = task_repo

    def execute(self, command: DeleteTaskCommand) -> None:
        """Run the delete task use case.

        Raises:
            TaskNotFoundError: If the task does not exist.
        """
        if not self._task_repo.delete(command.task_id):
            raise TaskNotFoundError(command.task_id)
        logger.info("Deleted task id=%s", command.task_id)
