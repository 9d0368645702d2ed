"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr = Field(..., max_length=255)
    # bcrypt only reads the first 72 bytes
    password: str = Field(..., min_length=3, max_length=72)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Authentication response.

    ``token`` is only populated on login; registration returns ``None``.
    """

    token: str | None = None
    token_type: str = "bearer"  # noqa: S105
    username: str
    message: str


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
