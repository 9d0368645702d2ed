"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.auth import (
    AuthenticatedIdentity,
    TokenService,
    get_token_service,
    resolve_identity,
)
from src.services.task_service import TaskService

# auto_error is off so a missing header surfaces as our own Unauthenticated error
security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthenticatedIdentity:
    """Resolve the caller from the bearer token on the request."""
    token = credentials.credentials if credentials else None
    return resolve_identity(db, token_service, token)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(db)
