"""
Use case: Register a new user.

Input: RegisterUserCommand (username, email, password)
Output: AuthResult (user without password, bearer token)
Side effects: Persists one user; the plaintext password is hashed and discarded.
Failure cases: DuplicateError.
"""

import logging

from todo_api.application.todo.dtos import AuthResult, RegisterUserCommand, UserResult
from todo_api.domain.todo.errors import DuplicateError
from todo_api.domain.todo.ports import PasswordHasher, TokenService, UserRepository

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Orchestrates user registration.

    Rejects an already registered email before touching the store,
    hashes the password, persists the user and issues a token.
    A username collision surfaces as the store's uniqueness violation.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._user_repo = user_repo
        self._password_hasher = password_hasher
        self._token_service = token_service

    def execute(self, command: RegisterUserCommand) -> AuthResult:
        """Run the registration use case.

        Args:
            command: The validated registration payload.

        Returns:
            The created user and a bearer token for it.

        Raises:
            DuplicateError: If the email is already registered.
        """
        if self._user_repo.email_exists(command.email):
            logger.info("Registration rejected: email already registered")
            raise DuplicateError("email")

        password_hash = self._password_hasher.hash(command.password)
        user = self._user_repo.add(
            username=command.username,
            email=command.email,
            password_hash=password_hash,
        )
        logger.info("Registered user id=%s", user.id)

        return AuthResult(
            user=UserResult.from_entity(user),
            token=self._token_service.issue(user.id),
        )
