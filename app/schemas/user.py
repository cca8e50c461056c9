"""Request/response schemas for the users resource."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from app.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)

EMAIL_MAX_LEN = 255


def strip_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def normalize_email(value: str) -> str:
    """Lowercase an address EmailStr already accepted and enforce the stored length."""
    email = value.lower()
    if len(email) > EMAIL_MAX_LEN:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LEN} characters")
    return email


def normalize_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("Name is required")
    return name


def normalize_role(value: str) -> str:
    return value.strip()


EmailField = Annotated[EmailStr, BeforeValidator(strip_text), AfterValidator(normalize_email)]
NameField = Annotated[
    str,
    Field(min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN),
    AfterValidator(normalize_name),
]
PasswordField = Annotated[str, Field(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)]
RoleField = Annotated[str, Field(max_length=32), AfterValidator(normalize_role)]


class UserCreate(BaseModel):
    """Body for POST /users (admin create). Role is optional."""

    name: NameField
    email: EmailField
    password: PasswordField
    role: RoleField | None = None


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}. Only fields present in the request are applied."""

    name: NameField | None = None
    email: EmailField | None = None
    role: RoleField | None = None


class UserRead(BaseModel):
    """Sanitized user: the only shape a user leaves the service in (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str | None = None
    created_at: datetime
