"""Create-user controller: payload validation and result envelope."""

import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from registration.errors import ErrorKind, RegistrationError, UnexpectedError, ValidationFailed
from registration.schemas.user import CreateUserPayload, UserConnected
from registration.use_cases.create_new_user import CreateNewUserUseCase

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CreateUserResult(BaseModel):
    """Outcome of a create-user request."""

    success: bool
    data: UserConnected | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, user: UserConnected) -> "CreateUserResult":
        return cls(success=True, data=user)

    @classmethod
    def failed(cls, error: RegistrationError) -> "CreateUserResult":
        return cls(success=False, error=error.message, error_kind=error.kind)


def validate_payload(raw_payload: Any) -> CreateUserPayload:
    """Check field presence, length and email grammar.

    Raises:
        ValidationFailed: with a generic message; field errors are kept on
            the exception for logging only.
    """
    try:
        payload = CreateUserPayload.model_validate(raw_payload)
    except ValidationError as e:
        logger.debug(f"Rejected create-user payload: {e.errors()}")
        raise ValidationFailed(details=e.errors()) from e

    # Second pass over the raw address: rejects the "Name <addr>" form the grammar check accepts
    if not EMAIL_PATTERN.match(payload.mail):
        raise ValidationFailed("Invalid email format")

    return payload


class CreateUserController:
    """Validates a registration request and runs the use case."""

    def __init__(self, use_case: CreateNewUserUseCase):
        self.use_case = use_case

    def handle(self, raw_payload: Any) -> CreateUserResult:
        try:
            payload = validate_payload(raw_payload)
            created = self.use_case.execute(payload.to_new_user())
        except RegistrationError as e:
            return CreateUserResult.failed(e)
        except Exception as e:
            logger.exception("Unexpected error while creating user")
            return CreateUserResult.failed(UnexpectedError(str(e) or None))

        return CreateUserResult.ok(created)
