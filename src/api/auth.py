"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.services.auth import (
    AuthenticatedIdentity,
    TokenService,
    create_user,
    get_token_service,
    get_user_by_username,
    login_user,
)
from src.services.errors import UnknownPrincipal

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user. No token is issued; the client logs in next."""
    user = create_user(db, user_data.username, user_data.email, user_data.password)
    return AuthResponse(token=None, username=user.username, message="User registered successfully")


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with username and password."""
    user, token = login_user(db, token_service, credentials.username, credentials.password)
    return AuthResponse(token=token, username=user.username, message="Login successful")


@router.get("/me", response_model=UserResponse)
def get_me(
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    user = get_user_by_username(db, identity.username)
    if user is None:
        raise UnknownPrincipal()
    return user
