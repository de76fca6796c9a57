"""
Use case: Resolve the acting user from an Authorization header.

Input: raw Authorization header value (or None)
Output: User (password hash excluded)
Side effects: None.
Failure cases: MissingTokenError, InvalidTokenError, ExpiredTokenError.
"""

import logging
from typing import Optional

from todo_api.domain.todo.entities import User
from todo_api.domain.todo.errors import InvalidTokenError, MissingTokenError
from todo_api.domain.todo.ports import TokenService, UserRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an "Authorization: Bearer <token>" header value.

    Raises:
        MissingTokenError: If the header is absent or uses another scheme.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingTokenError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingTokenError()
    return token


class AuthenticateRequestUseCase:
    """Authentication gate for protected operations.

    Verifies the bearer token, then resolves its subject against the
    user store. A token whose user no longer exists is rejected.
    """

    def __init__(self, user_repo: UserRepository, token_service: TokenService) -> None:
        self._user_repo = user_repo
        self._token_service = token_service

    def execute(self, authorization: Optional[str]) -> User:
        """Run the authentication gate.

        Args:
            authorization: Raw value of the Authorization header.

        Returns:
            The acting user.

        Raises:
            MissingTokenError: No bearer token was presented.
            ExpiredTokenError: The token is past its expiry.
            InvalidTokenError: The token is malformed, badly signed, or
                its user no longer exists.
        """
        token = extract_bearer_token(authorization)
        claims = self._token_service.verify(token)

        user = self._user_repo.get_by_id(claims.user_id)
        if user is None:
            logger.warning("Token subject %s no longer exists", claims.user_id)
            raise InvalidTokenError("Not authorized, user no longer exists")
        return user
