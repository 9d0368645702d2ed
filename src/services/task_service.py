"""Task service enforcing per-user ownership."""

import logging

from sqlalchemy.orm import Session

from src.models.enums import TaskPriority, TaskStatus
from src.models.task import Task
from src.schemas.task import TaskCreate, TaskUpdate
from src.services.auth import AuthenticatedIdentity
from src.services.errors import NotFoundOrForbidden

logger = logging.getLogger(__name__)

# Largest value the INTEGER primary key column can hold
MAX_TASK_ID = 2**31 - 1


class TaskService:
    """Task operations scoped to a single caller.

    Every method takes the caller's identity explicitly and only ever reads or
    writes rows whose ``user_id`` matches it.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned_query(self, caller: AuthenticatedIdentity):
        return self.db.query(Task).filter(Task.user_id == caller.user_id)

    def resolve_owned_task(self, task_id: int, caller: AuthenticatedIdentity) -> Task:
        """Get a task owned by the caller.

        A missing task and someone else's task both raise ``NotFoundOrForbidden``.
        """
        task = None
        if 0 < task_id <= MAX_TASK_ID:
            task = self._owned_query(caller).filter(Task.id == task_id).first()
        if task is None:
            logger.warning(f"Task {task_id} not found or not owned by user {caller.username}")
            raise NotFoundOrForbidden()
        return task

    def list_owned(
        self,
        caller: AuthenticatedIdentity,
        status: str | None = None,
        priority: str | None = None,
    ) -> list[Task]:
        """List the caller's tasks, optionally filtered by exact status/priority.

        Filter values are matched as given; one that names no known status or
        priority simply matches nothing.
        """
        query = self._owned_query(caller)
        if status is not None:
            query = query.filter(Task.status == status)
        if priority is not None:
            query = query.filter(Task.priority == priority)
        return query.order_by(Task.id).all()

    def create_task(self, caller: AuthenticatedIdentity, data: TaskCreate) -> Task:
        """Create a task owned by the caller."""
        task = Task(
            title=data.title,
            description=data.description,
            status=(data.status or TaskStatus.TODO).value,
            priority=(data.priority or TaskPriority.MEDIUM).value,
            user_id=caller.user_id,
        )
        self.db.add(task)
        self._commit()
        self.db.refresh(task)
        logger.info(f"Task {task.id} created by user {caller.username}")
        return task

    def update_task(self, task_id: int, caller: AuthenticatedIdentity, data: TaskUpdate) -> Task:
        """Update the mutable fields of an owned task.

        Only fields present in the request are applied. Any status may follow
        any other.
        """
        task = self.resolve_owned_task(task_id, caller)

        update_data = data.model_dump(exclude_unset=True)
        for field in ("title", "description", "status", "priority"):
            if field not in update_data:
                continue
            value = update_data[field]
            if field in ("title", "status", "priority") and value is None:
                # Required columns; null means "leave as is"
                continue
            if isinstance(value, TaskStatus | TaskPriority):
                value = value.value
            setattr(task, field, value)

        self._commit()
        self.db.refresh(task)
        return task

    def delete_task(self, task_id: int, caller: AuthenticatedIdentity) -> None:
        """Delete an owned task."""
        task = self.resolve_owned_task(task_id, caller)
        self.db.delete(task)
        self._commit()
        logger.info(f"Task deleted successfully: {task_id}")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
