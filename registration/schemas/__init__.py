"""Pydantic schemas for API requests and responses."""

from registration.schemas.user import (
    CreateUserPayload,
    ErrorResponse,
    NewUser,
    User,
    UserConnected,
    UserSignIn,
)

__all__ = [
    "CreateUserPayload",
    "ErrorResponse",
    "NewUser",
    "User",
    "UserConnected",
    "UserSignIn",
]
