"""In-memory user store. Volatile: contents live as long as the store object."""

import threading
from collections.abc import Iterable

from app.models.user import UserRecord

UPDATABLE_FIELDS = ("name", "email", "role")


class InMemoryUserStore:
    """
    Ordered collection of UserRecord with monotonically assigned ids.

    Ids start at 1 and are never reused, even after deletes. Id assignment and
    list mutation happen under a lock; email uniqueness is NOT enforced here
    (callers check before writing).
    """

    def __init__(self, records: Iterable[UserRecord] = ()) -> None:
        self._records: list[UserRecord] = list(records)
        self._next_id = max((r.id for r in self._records), default=0) + 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> list[UserRecord]:
        return list(self._records)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        return next((r for r in self._records if r.id == user_id), None)

    def find_by_email(self, email: str) -> UserRecord | None:
        return next((r for r in self._records if r.email == email), None)

    def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str | None = None,
    ) -> UserRecord:
        """Assign the next id, stamp created_at, append and return the stored record."""
        with self._lock:
            record = UserRecord(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            self._next_id += 1
            self._records.append(record)
        return record

    def update(self, user_id: int, fields: dict[str, object]) -> UserRecord | None:
        """Apply name/email/role in place. Other keys are ignored. Returns None if absent."""
        with self._lock:
            record = self.find_by_id(user_id)
            if record is None:
                return None
            for key in UPDATABLE_FIELDS:
                if key in fields:
                    setattr(record, key, fields[key])
        return record

    def remove(self, user_id: int) -> bool:
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == user_id:
                    del self._records[index]
                    return True
        return False
