#!/usr/bin/env python3
"""Seed a development database with a handful of tasks covering every status.

Usage:
    python scripts/seed_dev_data.py

Run after ``pip install -e .``. Requires TASKS_DATABASE_URL (or defaults to
localhost) and an applied schema (``alembic upgrade head``).
Re-running is a no-op: rows use fixed ids.
"""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.logging_setup import configure_logging

# Deterministic UUIDs for reproducibility
TASK_IDS = [uuid.UUID(f"00000000-0000-0000-0000-0000000002{i:02d}") for i in range(5)]

# (title, description, priority, status label, age in days)
TASKS = [
    ("Write project README", "Cover setup, configuration and the API table.", "medium", "completed", 6),
    ("Add readiness probe", "", "high", "completed", 5),
    ("Wire CORS for the web client", "Origins come from TASKS_CORS_ORIGINS.", "medium", "in_progress", 3),
    ("Review lost-update behaviour on PUT", "Decide whether a version column is worth it.", "low", "pending", 2),
    ("Triage bug reports", "", "high", "pending", 1),
]

log = structlog.get_logger()


async def seed():
    settings = get_settings()
    engine = create_async_engine(settings.database_url)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.now(timezone.utc)

    async with async_session() as session:
        for tid, (title, description, priority, status, age) in zip(TASK_IDS, TASKS):
            created_at = now - timedelta(days=age)
            completed_at = created_at + timedelta(hours=4) if status == "completed" else None
            await session.execute(text("""
                INSERT INTO tasks (id, title, description, priority, status, created_at, completed_at)
                VALUES (:id, :title, :description, CAST(:priority AS task_priority),
                        CAST(:status AS task_status), :created_at, :completed_at)
                ON CONFLICT (id) DO NOTHING
            """), {
                "id": tid,
                "title": title,
                "description": description,
                "priority": priority,
                "status": status,
                "created_at": created_at,
                "completed_at": completed_at,
            })

        await session.commit()

    await engine.dispose()
    log.info("seed.done", tasks=len(TASK_IDS))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed())
