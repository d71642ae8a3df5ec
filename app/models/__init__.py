# SQLModel definitions, imported here so the metadata is populated for Alembic and init_db.
from .base import UUIDMixin, CreatedAtMixin  # noqa: F401
from .task import Task  # noqa: F401
