"""Storage models."""

from app.models.user import UserRecord

__all__ = ["UserRecord"]
