"""Register a new user."""

import logging

from registration.errors import DuplicateEmail
from registration.repositories.base import UserRepository
from registration.schemas.user import NewUser, UserConnected

logger = logging.getLogger(__name__)


class CreateNewUserUseCase:
    """Create a user unless the email is already registered.

    The lookup before the insert is a fast path only. Two concurrent
    registrations can both pass it; the repository then reports the loser
    as ``DuplicateEmail`` from the storage constraint.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def execute(self, payload: NewUser) -> UserConnected:
        if self.repository.get_user_by_mail(payload.mail):
            logger.debug(f"Registration refused, email already in use: {payload.mail}")
            raise DuplicateEmail()

        user = self.repository.create_user(payload)
        logger.info(f"Registered user {user.id}")
        return user
