"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from app.schemas.health import HealthResponse
from app.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
