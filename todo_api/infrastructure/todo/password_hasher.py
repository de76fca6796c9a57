"""
Adapter: bcrypt password hashing.

Implements PasswordHasher port. Hashes are salted per password.
bcrypt only reads the first 72 bytes of a password; longer inputs are
truncated explicitly so both hashing and verification agree.
"""

from typing import Optional

import bcrypt

from todo_api.domain.todo.ports import PasswordHasher

BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    """Salted one-way hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # verified against when the user is unknown, so that path costs the same
        self._dummy_hash = bcrypt.hashpw(b"unknown-user", bcrypt.gensalt(rounds))

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("ascii")

    def verify(self, plaintext: str, password_hash: Optional[str]) -> bool:
        if password_hash is None:
            bcrypt.checkpw(_encode(plaintext), self._dummy_hash)
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), password_hash.encode("ascii"))
        except ValueError:
            # stored value is not a bcrypt hash
            return False
