"""
Use case: Exchange email and password for a bearer token.

Input: LoginCommand (email, password)
Output: AuthResult
Side effects: None.
Failure cases: InvalidCredentialsError (unknown email or wrong password,
indistinguishable to the caller).
"""

import logging

from todo_api.application.todo.dtos import AuthResult, LoginCommand, UserResult
from todo_api.domain.todo.errors import InvalidCredentialsError
from todo_api.domain.todo.ports import PasswordHasher, TokenService, UserRepository

logger = logging.getLogger(__name__)


class LoginUserUseCase:
    """Orchestrates credential verification.

    The hash comparison always runs, even for an unknown email, so
    neither timing nor message reveals which check failed.
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

    def execute(self, command: LoginCommand) -> AuthResult:
        """Run the login use case.

        Raises:
            InvalidCredentialsError: If the email or the password is wrong.
        """
        user = self._user_repo.get_credentials_by_email(command.email.strip().lower())
        password_hash = user.password_hash if user is not None else None

        matches = self._password_hasher.verify(command.password, password_hash)
        if user is None or not matches:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        logger.info("User id=%s logged in", user.id)
        return AuthResult(
            user=UserResult.from_entity(user),
            token=self._token_service.issue(user.id),
        )
