"""
Use case: Fetch a single task.

Input: GetTaskQuery (task_id)
Output: TaskResult
Side effects: None (read-only query).
Failure cases: TaskNotFoundError.
"""

from todo_api.application.todo.dtos import GetTaskQuery, TaskResult
from todo_api.domain.todo.errors import TaskNotFoundError
from todo_api.domain.todo.ports import TaskRepository


class GetTaskUseCase:
    def __init__(self, task_repo: TaskRepository) -> None:
        self._task_repo = task_repo

    def execute(self, query: GetTaskQuery) -> TaskResult:
        task = self._task_repo.get_by_id(query.task_id)
        if task is None:
            raise TaskNotFoundError(query.task_id)
        return TaskResult.from_entity(task)
