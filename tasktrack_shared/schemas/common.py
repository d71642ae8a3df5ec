from enum import Enum

from pydantic import BaseModel


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def db_label(member: Enum) -> str:
    """Database enum label for a member: the lowercased member name (IN_PROGRESS -> in_progress)."""
    return member.name.lower()


class ErrorResponse(BaseModel):
    message: str
