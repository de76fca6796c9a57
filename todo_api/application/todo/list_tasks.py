"""
Use case: List tasks.

Input: ListTasksQuery (status?, assigned_to?)
Output: list[TaskResult], newest first
Side effects: None (read-only query).
Failure cases: None.
"""

import logging

from todo_api.application.todo.dtos import ListTasksQuery, TaskResult
from todo_api.domain.todo.ports import TaskRepository

logger = logging.getLogger(__name__)


class ListTasksUseCase:
    """Orchestrates listing tasks with equality filters."""

    def __init__(self, task_repo: TaskRepository) -> None:
        self._task_repo = task_repo

    def execute(self, query: ListTasksQuery) -> list[TaskResult]:
        logger.debug(
            "Listing tasks: status=%s, assigned_to=%s",
            query.status.value if query.status else None,
            query.assigned_to,
        )
        tasks = self._task_repo.list(
            status=query.status,
            assigned_to=query.assigned_to,
        )
        return [TaskResult.from_entity(task) for task in tasks]
