"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Create a new task.

    Ownership is never read from the body; unknown fields such as ``user_id``
    are dropped.
    """

    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        """Reject titles made only of whitespace."""
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class TaskUpdate(BaseModel):
    """Update a task. Omitted fields keep their current value."""

    title: str | None = Field(None, min_length=3, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        """Reject titles made only of whitespace."""
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    user_id: int
    created_at: datetime
    updated_at: datetime
