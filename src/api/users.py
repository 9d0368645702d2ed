"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.schemas.auth import UserRegister, UserResponse
from src.services.auth import AuthenticatedIdentity, create_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/test", response_class=PlainTextResponse)
def smoke_test(
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
):
    """Token-protected smoke test."""
    return "User API is working!"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and return the created record."""
    return create_user(db, user_data.username, user_data.email, user_data.password)
