"""User repository port and the password check shared by its implementations."""

import hmac
from abc import ABC, abstractmethod

from registration.schemas.user import NewUser, User, UserConnected, UserSignIn


def passwords_match(stored: str, supplied: str) -> bool:
    """Exact string equality, in constant time."""
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


class UserRepository(ABC):
    """Storage port for users.

    Implementations own persistence; callers only ever receive the
    password-free ``UserConnected`` view, except from ``get_all_users``.
    Write failures are raised as ``DuplicateEmail`` or ``StorageUnavailable``.
    """

    @abstractmethod
    def create_user(self, payload: NewUser) -> UserConnected:
        """Insert a new user and return it without its password."""
        ...

    @abstractmethod
    def get_all_users(self) -> list[User]:
        """Return every stored user."""
        ...

    @abstractmethod
    def get_user_by_mail(self, mail: str) -> UserConnected | None:
        """Find a user by email, None when absent."""
        ...

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> UserConnected | None:
        """Find a user by identifier, None when absent."""
        ...

    @abstractmethod
    def user_connect(self, credentials: UserSignIn) -> UserConnected | None:
        """Return the user when email and password match exactly, else None."""
        ...
