"""Typed errors raised across the registration flow."""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds the HTTP layer can branch on."""

    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_EMAIL = "duplicate_email"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class RegistrationError(Exception):
    """Base class for every expected failure of the registration flow."""

    kind: ErrorKind
    default_message = "Failed to create user"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(RegistrationError):
    """The payload does not have the expected shape or content."""

    kind = ErrorKind.VALIDATION_FAILED
    default_message = "invalid payload"

    def __init__(self, message: str | None = None, details: list | None = None):
        super().__init__(message)
        self.details = details or []


class DuplicateEmail(RegistrationError):
    """A user with this email is already registered."""

    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "User already exists"


class StorageUnavailable(RegistrationError):
    """The storage backend could not complete the operation."""

    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Storage operation failed"


class NotFound(RegistrationError):
    """The requested user does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class UnexpectedError(RegistrationError):
    """Any failure outside the expected set, wrapped by the controller."""

    kind = ErrorKind.INTERNAL
