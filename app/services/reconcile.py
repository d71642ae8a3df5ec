"""
Task state reconciliation.

Computes the next persisted state of a task from a create request, or from
the stored task plus a partial update. Pure functions: no I/O, and the clock
can be pinned through ``now``.

``completed_at`` follows ``status``:
- entering COMPLETED from any other status stamps it with ``now``;
- re-sending COMPLETED on a completed task keeps the original stamp;
- a completed task that somehow lacks a stamp gets one on any update;
- explicitly setting any other status clears it.

On create, ``created_at`` and ``completed_at`` come from the same clock reading.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from tasktrack_shared.schemas.common import TaskStatus
from tasktrack_shared.schemas.tasks import TaskCreate, TaskDraft, TaskRead, TaskUpdate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def for_create(request: TaskCreate, now: Optional[datetime] = None) -> TaskDraft:
    now = now or _utcnow()
    status = request.status or TaskStatus.PENDING
    return TaskDraft(
        title=request.title,
        description=request.description,
        priority=request.priority,
        status=status,
        created_at=now,
        completed_at=now if status == TaskStatus.COMPLETED else None,
    )


def _next_completed_at(
    existing: TaskRead,
    new_status: TaskStatus,
    status_provided: bool,
    now: Optional[datetime],
) -> Optional[datetime]:
    if new_status == TaskStatus.COMPLETED:
        if existing.status != TaskStatus.COMPLETED or existing.completed_at is None:
            return now or _utcnow()
        return existing.completed_at
    if status_provided:
        return None
    return existing.completed_at


def for_update(
    existing: TaskRead, request: TaskUpdate, now: Optional[datetime] = None
) -> TaskRead:
    status_provided = request.status is not None
    new_status = request.status if status_provided else existing.status

    return existing.model_copy(
        update={
            "title": request.title if request.title is not None else existing.title,
            "description": (
                request.description if request.description is not None else existing.description
            ),
            "priority": request.priority if request.priority is not None else existing.priority,
            "status": new_status,
            "completed_at": _next_completed_at(existing, new_status, status_provided, now),
        }
    )
