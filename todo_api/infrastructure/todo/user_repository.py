"""
Adapter: User persistence.

Implements UserRepository port on top of SQLAlchemy Core.
The password hash is only selected by get_credentials_by_email.
"""

import logging
from typing import Optional

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine, Row

from todo_api.domain.todo.entities import User
from todo_api.domain.todo.ports import UserRepository
from todo_api.domain.todo.task_lifecycle import utc_now
from todo_api.infrastructure.todo.database import as_utc, users_table
from todo_api.infrastructure.todo.identifiers import (
    MalformedIdentifierError,
    new_identifier,
    parse_identifier,
)

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = (
    users_table.c.id,
    users_table.c.username,
    users_table.c.email,
    users_table.c.created_at,
    users_table.c.updated_at,
)


def _row_to_user(row: Row, with_password: bool = False) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        password_hash=row.password_hash if with_password else None,
    )


class SqlUserRepository(UserRepository):
    """Stores users in the users table.

    Implements the UserRepository port defined in the domain layer.
    Uniqueness of username and email is enforced by the table; a
    violation propagates as sqlalchemy.exc.IntegrityError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, username: str, email: str, password_hash: str) -> User:
        now = utc_now()
        user_id = new_identifier()
        with self._engine.begin() as conn:
            conn.execute(
                insert(users_table).values(
                    id=user_id,
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    created_at=now,
                    updated_at=now,
                )
            )
        return User(
            id=user_id,
            username=username,
            email=email,
            created_at=now,
            updated_at=now,
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            key = parse_identifier(user_id)
        except MalformedIdentifierError:
            return None
        query = select(*_PUBLIC_COLUMNS).where(users_table.c.id == key)
        with self._engine.connect() as conn:
            row = conn.execute(query).first()
        return _row_to_user(row) if row is not None else None

    def get_credentials_by_email(self, email: str) -> Optional[User]:
        query = select(*_PUBLIC_COLUMNS, users_table.c.password_hash).where(
            users_table.c.email == email
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).first()
        return _row_to_user(row, with_password=True) if row is not None else None

    def email_exists(self, email: str) -> bool:
        query = select(func.count()).select_from(users_table).where(
            users_table.c.email == email
        )
        with self._engine.connect() as conn:
            return conn.execute(query).scalar_one() > 0

    def exists(self, user_id: str) -> bool:
        try:
            key = parse_identifier(user_id)
        except MalformedIdentifierError:
            return False
        query = select(users_table.c.id).where(users_table.c.id == key)
        with self._engine.connect() as conn:
            return conn.execute(query).first() is not None

    def list_all(self) -> list[User]:
        query = select(*_PUBLIC_COLUMNS).order_by(users_table.c.created_at.desc())
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_user(row) for row in rows]
