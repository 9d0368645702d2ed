"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.errors import ErrorResponse, FieldViolation, field_violations
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "ErrorResponse",
    "FieldViolation",
    "field_violations",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
