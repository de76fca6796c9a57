"""
Use case: List every registered user.

Input: None
Output: list[UserResult]
Side effects: None (read-only query).
Failure cases: None.
"""

from todo_api.application.todo.dtos import UserResult
from todo_api.domain.todo.ports import UserRepository


class ListUsersUseCase:
    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self) -> list[UserResult]:
        return [UserResult.from_entity(user) for user in self._user_repo.list_all()]
