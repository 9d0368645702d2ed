"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Workflow status of a task.

    Any status may be set from any other; there is no enforced progression.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    """Priority levels for tasks."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
