"""
Tests for the todo infrastructure adapters.

Repositories run against an in-memory SQLite store; the password
hasher and token service run for real with cheap parameters.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy.exc import IntegrityError

from todo_api.domain.todo.entities import TaskStatus
from todo_api.domain.todo.errors import ExpiredTokenError, InvalidTokenError
from todo_api.domain.todo.task_lifecycle import NewTask, TaskPatch, apply_patch
from todo_api.infrastructure.todo.identifiers import (
    MalformedIdentifierError,
    new_identifier,
    parse_identifier,
)
from todo_api.infrastructure.todo.password_hasher import BcryptPasswordHasher
from todo_api.infrastructure.todo.task_repository import SqlTaskRepository
from todo_api.infrastructure.todo.token_service import JwtTokenService
from todo_api.infrastructure.todo.user_repository import SqlUserRepository

SECRET = "unit-test-secret"


@pytest.fixture
def users(engine) -> SqlUserRepository:
    return SqlUserRepository(engine)


@pytest.fixture
def tasks(engine) -> SqlTaskRepository:
    return SqlTaskRepository(engine)


class TestIdentifiers:
    def test_new_identifier_round_trips(self):
        key = new_identifier()
        assert len(key) == 32
        assert parse_identifier(key) == key

    def test_dashed_uuid_is_canonicalized(self):
        assert parse_identifier("12345678-1234-5678-1234-567812345678") == "12345678123456781234567812345678"

    @pytest.mark.parametrize("value", ["", "nonexistent", "1234", "zz" * 16])
    def test_malformed(self, value):
        with pytest.raises(MalformedIdentifierError):
            parse_identifier(value)


class TestSqlUserRepository:
    def test_add_and_read_back_without_hash(self, users):
        created = users.add("alice", "alice@example.com", "hash")
        assert created.password_hash is None

        fetched = users.get_by_id(created.id)
        assert fetched.username == "alice"
        assert fetched.password_hash is None
        assert fetched.created_at.tzinfo is not None

    def test_credentials_include_hash(self, users):
        users.add("alice", "alice@example.com", "hash")
        assert users.get_credentials_by_email("alice@example.com").password_hash == "hash"
        assert users.get_credentials_by_email("bob@example.com") is None

    def test_email_exists(self, users):
        users.add("alice", "alice@example.com", "hash")
        assert users.email_exists("alice@example.com")
        assert not users.email_exists("bob@example.com")

    def test_exists_tolerates_malformed_ids(self, users):
        created = users.add("alice", "alice@example.com", "hash")
        assert users.exists(created.id)
        assert not users.exists(new_identifier())
        assert not users.exists("not-an-id")
        assert users.get_by_id("not-an-id") is None

    def test_duplicate_username_violates_constraint(self, users):
        users.add("alice", "alice@example.com", "hash")
        with pytest.raises(IntegrityError):
            users.add("alice", "other@example.com", "hash")

    def test_list_all_newest_first(self, users):
        first = users.add("alice", "alice@example.com", "hash")
        second = users.add("bobby", "bob@example.com", "hash")
        listed = users.list_all()
        assert [u.id for u in listed] == [second.id, first.id]
        assert all(u.password_hash is None for u in listed)


class TestSqlTaskRepository:
    def test_add_starts_in_todo(self, tasks):
        task = tasks.add(NewTask(title="Test Task"))
        assert task.status is TaskStatus.TODO
        assert task.completed_at is None
        assert task.assignee is None

    def test_assignee_resolved_on_read(self, tasks, users):
        bob = users.add("bobby", "bob@example.com", "hash")
        task = tasks.add(NewTask(title="Test Task", assigned_to=bob.id))

        fetched = tasks.get_by_id(task.id)
        assert fetched.assigned_to == bob.id
        assert fetched.assignee.username == "bobby"
        assert fetched.assignee.email == "bob@example.com"

    def test_list_filters_and_orders(self, tasks, users):
        bob = users.add("bobby", "bob@example.com", "hash")
        first = tasks.add(NewTask(title="one"))
        second = tasks.add(NewTask(title="two", assigned_to=bob.id))
        third = tasks.add(NewTask(title="three"))
        tasks.save(replace(third, status=TaskStatus.IN_PROGRESS))

        assert [t.id for t in tasks.list()] == [third.id, second.id, first.id]
        assert [t.id for t in tasks.list(status=TaskStatus.TODO)] == [second.id, first.id]
        assert [t.id for t in tasks.list(assigned_to=bob.id)] == [second.id]
        assert tasks.list(assigned_to="not-an-id") == []
        assert tasks.list(status=TaskStatus.DONE) == []

    def test_save_persists_patch(self, tasks):
        task = tasks.add(NewTask(title="Test Task", description="desc"))
        now = datetime.now(timezone.utc)
        saved = tasks.save(apply_patch(task, TaskPatch(status=TaskStatus.DONE, description=None), now))

        assert saved.status is TaskStatus.DONE
        assert saved.description is None
        assert saved.completed_at is not None
        assert abs(saved.completed_at - now) < timedelta(seconds=1)

    def test_get_by_id_malformed_raises_cast_error(self, tasks):
        with pytest.raises(MalformedIdentifierError):
            tasks.get_by_id("nonexistent")

    def test_get_by_id_unknown(self, tasks):
        assert tasks.get_by_id(new_identifier()) is None

    def test_delete(self, tasks):
        task = tasks.add(NewTask(title="Test Task"))
        assert tasks.delete(task.id)
        assert not tasks.delete(task.id)
        assert tasks.get_by_id(task.id) is None

    def test_task_survives_assignee_removal(self, tasks, users, engine):
        from sqlalchemy import delete

        from todo_api.infrastructure.todo.database import users_table

        bob = users.add("bobby", "bob@example.com", "hash")
        task = tasks.add(NewTask(title="Test Task", assigned_to=bob.id))
        with engine.begin() as conn:
            conn.execute(delete(users_table).where(users_table.c.id == bob.id))

        fetched = tasks.get_by_id(task.id)
        assert fetched.assigned_to == bob.id
        assert fetched.assignee is None


class TestBcryptPasswordHasher:
    @pytest.fixture
    def hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=4)

    def test_hash_is_salted(self, hasher):
        first = hasher.hash("secret123")
        second = hasher.hash("secret123")
        assert first != second
        assert "secret123" not in first

    def test_verify(self, hasher):
        stored = hasher.hash("secret123")
        assert hasher.verify("secret123", stored)
        assert not hasher.verify("wrong", stored)

    def test_verify_without_hash(self, hasher):
        assert not hasher.verify("secret123", None)

    def test_verify_garbage_hash(self, hasher):
        assert not hasher.verify("secret123", "not-a-bcrypt-hash")


class TestJwtTokenService:
    def test_issue_and_verify(self):
        service = JwtTokenService(SECRET)
        assert service.verify(service.issue("abc")).user_id == "abc"

    def test_expired_token(self):
        service = JwtTokenService(SECRET, expires_in=timedelta(seconds=-10))
        with pytest.raises(ExpiredTokenError):
            service.verify(service.issue("abc"))

    def test_wrong_secret(self):
        token = JwtTokenService("other-secret").issue("abc")
        with pytest.raises(InvalidTokenError):
            JwtTokenService(SECRET).verify(token)

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            JwtTokenService(SECRET).verify("not.a.token")

    def test_token_without_user_id(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)}, SECRET, algorithm="HS256"
        )
        with pytest.raises(InvalidTokenError):
            JwtTokenService(SECRET).verify(token)
