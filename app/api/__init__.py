"""
API router.

Task endpoints are served at the root under /tasks.
"""

from fastapi import APIRouter

from . import tasks

router = APIRouter()

router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
