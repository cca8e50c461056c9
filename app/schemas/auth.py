"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from app.core.security import PASSWORD_MAX_LEN
from app.schemas.user import EmailField, NameField, PasswordField


class RegisterRequest(BaseModel):
    """Self-registration: name, email and password."""

    name: NameField = Field(..., description="Display name")
    email: EmailField = Field(..., description="Email, unique across users")
    password: PasswordField = Field(..., description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailField = Field(..., description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after register or login."""

    token: str = Field(..., description="JWT access token")


class CurrentUser(BaseModel):
    """Authenticated caller, taken from the token claims."""

    id: int
    email: str
