"""
Shared fixtures: an in-memory repository and an HTTP client bound to it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.main import create_app
from app.services.repository import get_task_repository
from tasktrack_shared.schemas.tasks import TaskDraft, TaskRead


class InMemoryTaskRepository:
    """
    Dict-backed TaskRepository for handler tests.

    created_at is strictly increasing so list ordering is deterministic.
    """

    def __init__(self) -> None:
        self.tasks: dict[uuid.UUID, TaskRead] = {}
        self._last_created: Optional[datetime] = None

    def _next_created_at(self, requested: Optional[datetime]) -> datetime:
        now = requested or datetime.now(timezone.utc)
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now

    async def fetch_by_id(self, task_id: uuid.UUID) -> Optional[TaskRead]:
        return self.tasks.get(task_id)

    async def insert(self, draft: TaskDraft) -> TaskRead:
        task = TaskRead(
            id=uuid.uuid4(),
            created_at=self._next_created_at(draft.created_at),
            **draft.model_dump(exclude={"created_at"}),
        )
        self.tasks[task.id] = task
        return task

    async def update_by_id(self, task_id: uuid.UUID, task: TaskRead) -> Optional[TaskRead]:
        existing = self.tasks.get(task_id)
        if existing is None:
            return None
        stored = existing.model_copy(
            update=task.model_dump(
                include={"title", "description", "priority", "status", "completed_at"}
            )
        )
        self.tasks[task_id] = stored
        return stored

    async def delete_by_id(self, task_id: uuid.UUID) -> bool:
        return self.tasks.pop(task_id, None) is not None

    async def list_all(self) -> list[TaskRead]:
        return sorted(self.tasks.values(), key=lambda t: t.created_at, reverse=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="warning")


@pytest.fixture
def repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def app(settings: Settings, repo: InMemoryTaskRepository):
    application = create_app(settings)
    application.dependency_overrides[get_task_repository] = lambda: repo
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
