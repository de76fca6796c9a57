"""
Adapter: Task persistence.

Implements TaskRepository port on top of SQLAlchemy Core.
Reads resolve assigned_to to a (username, email) projection with a
left outer join, so a task whose assignee was removed still loads.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.sql import Select

from todo_api.domain.todo.entities import Task, TaskStatus, UserSummary
from todo_api.domain.todo.errors import TaskNotFoundError
from todo_api.domain.todo.ports import TaskRepository
from todo_api.domain.todo.task_lifecycle import NewTask, utc_now
from todo_api.infrastructure.todo.database import as_utc, tasks_table, users_table
from todo_api.infrastructure.todo.identifiers import (
    MalformedIdentifierError,
    new_identifier,
    parse_identifier,
)

logger = logging.getLogger(__name__)


def _select_tasks() -> Select:
    return select(
        tasks_table,
        users_table.c.id.label("assignee_id"),
        users_table.c.username.label("assignee_username"),
        users_table.c.email.label("assignee_email"),
    ).select_from(
        tasks_table.outerjoin(users_table, users_table.c.id == tasks_table.c.assigned_to)
    )


def _row_to_task(row: Row) -> Task:
    assignee = None
    if row.assignee_id is not None:
        assignee = UserSummary(
            id=row.assignee_id,
            username=row.assignee_username,
            email=row.assignee_email,
        )
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        due_date=as_utc(row.due_date),
        assigned_to=row.assigned_to,
        completed_at=as_utc(row.completed_at),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        assignee=assignee,
    )


class SqlTaskRepository(TaskRepository):
    """Stores tasks in the tasks table.

    Implements the TaskRepository port defined in the domain layer.
    Identifiers that cannot be cast raise MalformedIdentifierError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, new_task: NewTask) -> Task:
        now = utc_now()
        task_id = new_identifier()
        assigned_to = (
            parse_identifier(new_task.assigned_to) if new_task.assigned_to else None
        )
        with self._engine.begin() as conn:
            conn.execute(
                insert(tasks_table).values(
                    id=task_id,
                    title=new_task.title,
                    description=new_task.description,
                    status=TaskStatus.TODO.value,
                    due_date=as_utc(new_task.due_date),
                    assigned_to=assigned_to,
                    completed_at=None,
                    created_at=now,
                    updated_at=now,
                )
            )
        return self._load(task_id)

    def get_by_id(self, task_id: str) -> Optional[Task]:
        key = parse_identifier(task_id)
        with self._engine.connect() as conn:
            row = conn.execute(_select_tasks().where(tasks_table.c.id == key)).first()
        return _row_to_task(row) if row is not None else None

    def list(
        self,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[str] = None,
    ) -> list[Task]:
        query = _select_tasks()
        if status is not None:
            query = query.where(tasks_table.c.status == status.value)
        if assigned_to is not None:
            try:
                key = parse_identifier(assigned_to)
            except MalformedIdentifierError:
                return []
            query = query.where(tasks_table.c.assigned_to == key)
        query = query.order_by(tasks_table.c.created_at.desc())

        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()

        logger.debug("Fetched %d tasks.", len(rows))
        return [_row_to_task(row) for row in rows]

    def save(self, task: Task) -> Task:
        key = parse_identifier(task.id)
        assigned_to = parse_identifier(task.assigned_to) if task.assigned_to else None
        with self._engine.begin() as conn:
            result = conn.execute(
                update(tasks_table)
                .where(tasks_table.c.id == key)
                .values(
                    title=task.title,
                    description=task.description,
                    status=task.status.value,
                    due_date=as_utc(task.due_date),
                    assigned_to=assigned_to,
                    completed_at=task.completed_at,
                    updated_at=task.updated_at,
                )
            )
        if result.rowcount == 0:
            raise TaskNotFoundError(task.id)
        return self._load(key)

    def delete(self, task_id: str) -> bool:
        key = parse_identifier(task_id)
        with self._engine.begin() as conn:
            result = conn.execute(delete(tasks_table).where(tasks_table.c.id == key))
        return result.rowcount > 0

    def _load(self, key: str) -> Task:
        task = self.get_by_id(key)
        if task is None:
            raise TaskNotFoundError(key)
        return task
