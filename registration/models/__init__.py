"""SQLAlchemy models."""

from registration.models.user import User

__all__ = ["User"]
