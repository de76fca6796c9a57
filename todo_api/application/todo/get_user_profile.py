"""
Use case: Retrieve the profile of the authenticated user.

Input: GetUserProfileQuery (user_id)
Output: UserResult
Side effects: None (read-only query).
Failure cases: UserNotFoundError.
"""

from todo_api.application.todo.dtos import GetUserProfileQuery, UserResult
from todo_api.domain.todo.errors import UserNotFoundError
from todo_api.domain.todo.ports import UserRepository


class GetUserProfileUseCase:
    """Reads a single user, password hash excluded."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, query: GetUserProfileQuery) -> UserResult:
        user = self._user_repo.get_by_id(query.user_id)
        if user is None:
            raise UserNotFoundError(query.user_id)
        return UserResult.from_entity(user)
