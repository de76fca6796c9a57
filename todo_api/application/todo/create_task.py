"""
Use case: Create a task.

Input: CreateTaskCommand (title, description?, due_date?, assigned_to?)
Output: TaskResult
Side effects: Persists one task in the "to-do" state.
Failure cases: InvalidReferenceError.
"""

import logging

from todo_api.application.todo.dtos import CreateTaskCommand, TaskResult
from todo_api.domain.todo.errors import InvalidReferenceError
from todo_api.domain.todo.ports import TaskRepository, UserRepository
from todo_api.domain.todo.task_lifecycle import NewTask

logger = logging.getLogger(__name__)


def ensure_assignee_exists(user_repo: UserRepository, assigned_to: str) -> None:
    """Reference check for assigned_to.

    Checked at write time only; the store keeps no foreign key.

    Raises:
        InvalidReferenceError: If no user has this id.
    """
    if not user_repo.exists(assigned_to):
        raise InvalidReferenceError("assignedTo", assigned_to)


class CreateTaskUseCase:
    """Orchestrates task creation.

    The reference check and the insert are two separate store calls;
    an assignee removed in between is an accepted race.
    """

    def __init__(self, task_repo: TaskRepository, user_repo: UserRepository) -> None:
        self._task_repo = task_repo
        self._user_repo = user_repo

    def execute(self, command: CreateTaskCommand) -> TaskResult:
        """Run the create task use case.

        Raises:
            InvalidReferenceError: If assigned_to does not resolve to a user.
        """
        if command.assigned_to:
            ensure_assignee_exists(self._user_repo, command.assigned_to)

        task = self._task_repo.add(
            NewTask(
                title=command.title,
                description=command.description,
                due_date=command.due_date,
                assigned_to=command.assigned_to or None,
            )
        )
        logger.info("Created task id=%s", task.id)
        return TaskResult.from_entity(task)
