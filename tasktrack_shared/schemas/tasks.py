"""Task-related Pydantic schemas shared by the server and API clients."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .common import TaskPriority, TaskStatus


class _CamelModel(BaseModel):
    """Wire models use lowerCamelCase and accept snake_case on input too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class TaskCreate(_CamelModel):
    title: str = Field(min_length=1)
    description: str
    priority: TaskPriority
    status: Optional[TaskStatus] = None


class TaskUpdate(_CamelModel):
    """Partial update. A field left out (or sent as null) is not provided."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None


# ---------------------------------------------------------------------------
# Task state
# ---------------------------------------------------------------------------

class TaskDraft(_CamelModel):
    """A reconciled task that has not been stored yet (no id).

    ``created_at`` is left to the store when unset.
    """
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class TaskRead(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: uuid.UUID
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    created_at: datetime
    completed_at: Optional[datetime] = None
