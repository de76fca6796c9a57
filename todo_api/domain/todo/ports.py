"""
Port interfaces (ABCs) for the todo bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from todo_api.domain.todo.entities import Task, TaskStatus, TokenClaims, User
from todo_api.domain.todo.task_lifecycle import NewTask


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def add(self, username: str, email: str, password_hash: str) -> User:
        """Persist a new user and return it without its password hash.

        The store assigns the identifier and both timestamps.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Return a user by id (password hash excluded), or None.

        A malformed id resolves to None.
        """
        raise NotImplementedError

    @abstractmethod
    def get_credentials_by_email(self, email: str) -> Optional[User]:
        """Return the user with this email including its password hash, or None."""
        raise NotImplementedError

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        """Return True if a user is registered with this email."""
        raise NotImplementedError

    @abstractmethod
    def exists(self, user_id: str) -> bool:
        """Return True if user_id resolves to a user. Malformed ids do not."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user, newest first, password hashes excluded."""
        raise NotImplementedError


class TaskRepository(ABC):
    """Port for persisting and retrieving tasks."""

    @abstractmethod
    def add(self, new_task: NewTask) -> Task:
        """Persist a new task in the "to-do" state and return it."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Return a task with its assignee resolved, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[str] = None,
    ) -> list[Task]:
        """Return tasks matching the equality filters, newest first.

        Args:
            status: Optional filter on the task status.
            assigned_to: Optional filter on the assignee id.

        Returns:
            List of tasks with assignees resolved.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Persist every mutable field of an existing task and return it reloaded."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Hard-delete a task. Return False if nothing was deleted."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way salted password hashing."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, plaintext: str, password_hash: Optional[str]) -> bool:
        """Compare a plaintext password against a hash.

        A None hash must still cost one comparison and return False.
        """
        raise NotImplementedError


class TokenService(ABC):
    """Port for issuing and verifying signed bearer tokens."""

    @abstractmethod
    def issue(self, user_id: str) -> str:
        """Return a signed token carrying the user id and an expiry."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry.

        Raises:
            ExpiredTokenError: If the token is past its expiry.
            InvalidTokenError: If the token is malformed or badly signed.
        """
        raise NotImplementedError
