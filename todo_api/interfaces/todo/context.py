"""
Per-request context threaded through protected operations.

Route handlers receive a RequestContext from the authentication
dependency instead of reading attributes attached to the request object.
"""

from dataclasses import dataclass

from todo_api.domain.todo.entities import User


@dataclass(frozen=True)
class RequestContext:
    """The authenticated user behind the request being served."""

    user: User

    @property
    def user_id(self) -> str:
        return self.user.id
