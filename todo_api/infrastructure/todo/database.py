"""
Adapter support: SQLAlchemy engine and table definitions.

The store is reached through SQLAlchemy Core. PostgreSQL is the
production target; any SQLAlchemy URL works (tests use in-memory SQLite).
tasks.assigned_to carries no foreign key to users.id;
the reference is checked at write time only.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

tasks_table = Table(
    "tasks",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("title", String(100), nullable=False),
    Column("description", String(500), nullable=True),
    Column("status", String(20), nullable=False, index=True),
    Column("due_date", DateTime(timezone=True), nullable=True, index=True),
    Column("assigned_to", String(32), nullable=True, index=True),
    Column("completed_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


def build_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the configured store.

    In-memory SQLite gets a single shared connection so every request
    sees the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    """Create the users and tasks tables if they do not exist."""
    metadata.create_all(engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC before writing or after reading.

    SQLite hands back naive datetimes even for timezone-aware columns.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
