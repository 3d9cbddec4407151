"""In-memory user repository for tests.

Not safe for concurrent use: there is no locking around the user list.
"""

from uuid import uuid4

from registration.errors import DuplicateEmail
from registration.repositories.base import UserRepository, passwords_match
from registration.schemas.user import NewUser, User, UserConnected, UserSignIn


class MockUserRepository(UserRepository):
    """User repository backed by a plain list."""

    def __init__(self, users: list[User] | None = None):
        self._users: list[User] = list(users or [])

    def create_user(self, payload: NewUser) -> UserConnected:
        # Mirror the unique constraint of the users table
        if self._find_by_mail(payload.mail):
            raise DuplicateEmail()
        created = User(id=str(uuid4()), **payload.model_dump())
        self._users.append(created)
        return created.to_connected()

    def get_all_users(self) -> list[User]:
        return list(self._users)

    def get_user_by_mail(self, mail: str) -> UserConnected | None:
        user = self._find_by_mail(mail)
        return user.to_connected() if user else None

    def get_user_by_id(self, user_id: str) -> UserConnected | None:
        user = next((u for u in self._users if u.id == user_id), None)
        return user.to_connected() if user else None

    def user_connect(self, credentials: UserSignIn) -> UserConnected | None:
        user = self._find_by_mail(credentials.mail)
        if not user or not passwords_match(user.password, credentials.password):
            return None
        return user.to_connected()

    def _find_by_mail(self, mail: str) -> User | None:
        return next((u for u in self._users if u.mail == mail), None)
