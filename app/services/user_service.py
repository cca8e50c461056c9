"""User service: business operations over the in-memory store. Every record it returns is sanitized."""

import logging

from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
    verify_password,
)
from app.models.user import UserRecord
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.user_store import InMemoryUserStore

logger = logging.getLogger(__name__)


def sanitize(record: UserRecord) -> UserRead:
    """Drop the password hash; UserRead has no field for it."""
    return UserRead.model_validate(record)


class UserService:
    """
    Orchestrates the store and the password hasher.

    Email uniqueness is the caller's job: create() and update() write whatever
    they are given. The check-then-write done by the routes is not atomic.
    """

    def __init__(self, store: InMemoryUserStore, bcrypt_rounds: int | None = None) -> None:
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    def list_users(self) -> list[UserRead]:
        return [sanitize(r) for r in self.store.all()]

    def get_by_id(self, user_id: int) -> UserRead | None:
        record = self.store.find_by_id(user_id)
        return sanitize(record) if record else None

    def get_by_email(self, email: str) -> UserRead | None:
        record = self.store.find_by_email(email)
        return sanitize(record) if record else None

    def create(self, data: UserCreate) -> UserRead:
        """
        Hash the password, store the user under the next id and return it sanitized.

        Raises ValidationError for a password outside the allowed length and
        StorageError for any unexpected hashing or store failure.
        """
        if not (PASSWORD_MIN_LEN <= len(data.password) <= PASSWORD_MAX_LEN):
            raise ValidationError(
                f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters."
            )
        try:
            password_hash = hash_password(data.password, rounds=self.bcrypt_rounds)
            record = self.store.insert(
                name=data.name,
                email=data.email,
                password_hash=password_hash,
                role=data.role,
            )
        except Exception as e:
            raise StorageError("Failed to create user", cause=e) from e
        logger.info("User created", extra={"user_id": record.id})
        return sanitize(record)

    def update(self, user_id: int, data: UserUpdate) -> UserRead:
        """Apply only the fields set on data (name, email, role). Raises NotFoundError if absent."""
        fields = data.model_dump(exclude_unset=True, include={"name", "email", "role"})
        # role may be cleared with null; name and email may not.
        fields = {k: v for k, v in fields.items() if v is not None or k == "role"}
        record = self.store.update(user_id, fields)
        if record is None:
            raise NotFoundError()
        logger.info("User updated", extra={"user_id": user_id, "fields": sorted(fields)})
        return sanitize(record)

    def delete(self, user_id: int) -> bool:
        if not self.store.remove(user_id):
            raise NotFoundError()
        logger.info("User deleted", extra={"user_id": user_id})
        return True

    def verify_credentials(self, email: str, password: str) -> UserRead | None:
        """Return the sanitized user when email and password match, else None."""
        record = self.store.find_by_email(email)
        if record is None or not record.password_hash:
            return None
        if not verify_password(password, record.password_hash):
            return None
        return sanitize(record)
