"""Storage form of a user account, kept by the in-memory store."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass
class UserRecord:
    """
    User account as held in the store.

    password_hash only exists in this form; everything returned to callers
    outside the service goes through UserRead, which has no such field.
    """

    id: int
    name: str
    email: str
    password_hash: str
    role: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
