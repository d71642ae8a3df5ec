"""Task model."""

from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from tasktrack_shared.schemas.common import TaskPriority, TaskStatus, db_label

from .base import CreatedAtMixin, UUIDMixin


def _db_labels(enum_cls) -> list[str]:
    return [db_label(member) for member in enum_cls]


class Task(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "tasks"

    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    priority: TaskPriority = Field(
        sa_column=sa.Column(
            sa.Enum(TaskPriority, name="task_priority", values_callable=_db_labels),
            nullable=False,
            index=True,
        )
    )
    status: TaskStatus = Field(
        sa_column=sa.Column(
            sa.Enum(TaskStatus, name="task_status", values_callable=_db_labels),
            nullable=False,
            index=True,
        )
    )
    completed_at: Optional[datetime] = Field(default=None, sa_type=sa.DateTime(timezone=True))
