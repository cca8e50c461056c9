"""Core app configuration, security helpers and domain errors."""

from app.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
