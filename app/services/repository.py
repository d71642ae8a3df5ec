"""
Task repository: the persistence port used by the request handlers.

Every method is one atomic unit of work against the store: it commits on
success and rolls back before raising ``RepositoryError`` on failure.
"""

from __future__ import annotations

import uuid
from typing import Optional, Protocol

import structlog
from fastapi import Depends
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.database import get_session
from app.core.errors import RepositoryError
from app.models.task import Task
from tasktrack_shared.schemas.tasks import TaskDraft, TaskRead

log = structlog.get_logger()

# asyncpg raises plain OSError subclasses when it cannot connect at all.
STORE_ERRORS = (SQLAlchemyError, OSError)


class TaskRepository(Protocol):
    async def fetch_by_id(self, task_id: uuid.UUID) -> Optional[TaskRead]: ...

    async def insert(self, draft: TaskDraft) -> TaskRead: ...

    async def update_by_id(self, task_id: uuid.UUID, task: TaskRead) -> Optional[TaskRead]: ...

    async def delete_by_id(self, task_id: uuid.UUID) -> bool: ...

    async def list_all(self) -> list[TaskRead]: ...


class SQLTaskRepository:
    """``TaskRepository`` backed by the ``tasks`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fail(self, op: str) -> RepositoryError:
        try:
            await self.session.rollback()
        except STORE_ERRORS:
            log.warning("repository.rollback_failed", op=op)
        return RepositoryError(f"{op} failed")

    async def fetch_by_id(self, task_id: uuid.UUID) -> Optional[TaskRead]:
        try:
            task = await self.session.get(Task, task_id)
        except STORE_ERRORS as exc:
            raise await self._fail("fetch_by_id") from exc
        return TaskRead.model_validate(task) if task else None

    async def insert(self, draft: TaskDraft) -> TaskRead:
        fields = dict(
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            status=draft.status,
            completed_at=draft.completed_at,
        )
        if draft.created_at is not None:
            fields["created_at"] = draft.created_at
        task = Task(**fields)
        try:
            self.session.add(task)
            await self.session.commit()
            await self.session.refresh(task)
        except STORE_ERRORS as exc:
            raise await self._fail("insert") from exc
        return TaskRead.model_validate(task)

    async def update_by_id(self, task_id: uuid.UUID, task: TaskRead) -> Optional[TaskRead]:
        table = Task.__table__
        stmt = (
            update(table)
            .where(table.c.id == task_id)
            .values(
                title=task.title,
                description=task.description,
                priority=task.priority,
                status=task.status,
                completed_at=task.completed_at,
            )
            .returning(table)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().one_or_none()
            await self.session.commit()
        except STORE_ERRORS as exc:
            raise await self._fail("update_by_id") from exc
        return TaskRead.model_validate(dict(row)) if row else None

    async def delete_by_id(self, task_id: uuid.UUID) -> bool:
        try:
            result = await self.session.execute(delete(Task).where(Task.id == task_id))
            await self.session.commit()
        except STORE_ERRORS as exc:
            raise await self._fail("delete_by_id") from exc
        return result.rowcount > 0

    async def list_all(self) -> list[TaskRead]:
        try:
            result = await self.session.execute(
                select(Task).order_by(Task.created_at.desc())
            )
        except STORE_ERRORS as exc:
            raise await self._fail("list_all") from exc
        return [TaskRead.model_validate(t) for t in result.scalars().all()]


async def get_task_repository(
    session: AsyncSession = Depends(get_session),
) -> TaskRepository:
    """FastAPI dependency: a repository bound to the request's session."""
    return SQLTaskRepository(session)
