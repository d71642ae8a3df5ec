"""
Error types and their HTTP mapping.

Every error response has the body ``{"message": "..."}``. Store failures are
logged in full and reported to the caller with a fixed message only.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = structlog.get_logger()

NOT_FOUND_MESSAGE = "Task not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class TaskNotFoundError(Exception):
    """The task id does not resolve to a stored task."""

    def __init__(self, task_id=None):
        super().__init__(f"task {task_id} not found" if task_id else "task not found")
        self.task_id = task_id


class RepositoryError(Exception):
    """The underlying store failed. Distinct from an absent task."""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return _error(404, NOT_FOUND_MESSAGE)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    log.exception(
        "repository.error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return _error(500, INTERNAL_ERROR_MESSAGE)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info(
        "request.invalid",
        method=request.method,
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return _error(400, _describe_validation_error(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(
        "request.unhandled_error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return _error(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
