"""
Task endpoints: list, get, create, partial update, delete.

Handlers validate the request shape (FastAPI/pydantic), talk to the
repository, and run the reconciliation engine between read and write.
Updates are read-merge-write without row locking: two concurrent updates to
the same task can lose one of the writes.
"""

from __future__ import annotations

import uuid
from typing import List

import structlog
from fastapi import APIRouter, Depends, Response

from app.core.errors import TaskNotFoundError
from app.services import reconcile
from app.services.repository import TaskRepository, get_task_repository
from tasktrack_shared.schemas.common import ErrorResponse
from tasktrack_shared.schemas.tasks import TaskCreate, TaskRead, TaskUpdate

router = APIRouter()
log = structlog.get_logger()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Task not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid request"}}


@router.get("", response_model=List[TaskRead])
async def list_tasks_endpoint(
    repo: TaskRepository = Depends(get_task_repository),
):
    """List every task, newest first."""
    return await repo.list_all()


@router.get("/{task_id}", response_model=TaskRead, responses={**NOT_FOUND, **BAD_REQUEST})
async def get_task_endpoint(
    task_id: uuid.UUID,
    repo: TaskRepository = Depends(get_task_repository),
):
    task = await repo.fetch_by_id(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.post("", response_model=TaskRead, status_code=201, responses=BAD_REQUEST)
async def create_task_endpoint(
    task_in: TaskCreate,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Create a task. Status defaults to pending."""
    task = await repo.insert(reconcile.for_create(task_in))
    log.info("task.created", task_id=str(task.id), status=task.status.value)
    return task


@router.put("/{task_id}", response_model=TaskRead, responses={**NOT_FOUND, **BAD_REQUEST})
async def update_task_endpoint(
    task_id: uuid.UUID,
    task_in: TaskUpdate,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Apply a partial update; fields left out keep their stored values."""
    existing = await repo.fetch_by_id(task_id)
    if existing is None:
        raise TaskNotFoundError(task_id)

    merged = reconcile.for_update(existing, task_in)
    task = await repo.update_by_id(task_id, merged)
    if task is None:
        # Deleted between the read and the write.
        raise TaskNotFoundError(task_id)

    log.info(
        "task.updated",
        task_id=str(task_id),
        from_status=existing.status.value,
        to_status=task.status.value,
        fields=sorted(task_in.model_dump(exclude_none=True)),
    )
    return task


@router.delete("/{task_id}", status_code=204, responses={**NOT_FOUND, **BAD_REQUEST})
async def delete_task_endpoint(
    task_id: uuid.UUID,
    repo: TaskRepository = Depends(get_task_repository),
):
    if not await repo.delete_by_id(task_id):
        raise TaskNotFoundError(task_id)
    log.info("task.deleted", task_id=str(task_id))
    return Response(status_code=204)
