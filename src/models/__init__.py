"""SQLAlchemy models."""

from src.models.task import Task
from src.models.user import User

__all__ = [
    "User",
    "Task",
]
