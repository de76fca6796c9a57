"""
Adapter: JWT bearer tokens.

Implements TokenService port with PyJWT. Tokens carry the user id
under "id" plus "iat" and "exp" claims, signed with the server secret.
"""

import logging
from datetime import timedelta

import jwt

from todo_api.domain.todo.entities import TokenClaims
from todo_api.domain.todo.errors import ExpiredTokenError, InvalidTokenError
from todo_api.domain.todo.ports import TokenService
from todo_api.domain.todo.task_lifecycle import utc_now

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "id"


class JwtTokenService(TokenService):
    """Issues and verifies HMAC-signed JSON Web Tokens.

    Args:
        secret: Signing secret held by the server.
        algorithm: JWT algorithm, HS256 by default.
        expires_in: Token lifetime.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=30),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, user_id: str) -> str:
        issued_at = utc_now()
        payload = {
            USER_ID_CLAIM: user_id,
            "iat": issued_at,
            "exp": issued_at + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", USER_ID_CLAIM]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected bearer token: %s", type(exc).__name__)
            raise InvalidTokenError() from exc

        user_id = payload[USER_ID_CLAIM]
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError()

        return TokenClaims(user_id=user_id)
