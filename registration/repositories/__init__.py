"""User repositories."""

from registration.repositories.base import UserRepository
from registration.repositories.mock import MockUserRepository
from registration.repositories.sql import SqlUserRepository

__all__ = ["UserRepository", "MockUserRepository", "SqlUserRepository"]
