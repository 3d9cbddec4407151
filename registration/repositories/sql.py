"""SQLAlchemy-backed user repository."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from registration.errors import DuplicateEmail, StorageUnavailable
from registration.models.user import User as UserRow
from registration.repositories.base import UserRepository, passwords_match
from registration.schemas.user import NewUser, User, UserConnected, UserSignIn

logger = logging.getLogger(__name__)


class SqlUserRepository(UserRepository):
    """User repository over the ``users`` table."""

    def __init__(self, db: Session):
        self.db = db

    def _first_by_mail(self, mail: str) -> UserRow | None:
        return self.db.query(UserRow).filter(UserRow.mail == mail).first()

    def create_user(self, payload: NewUser) -> UserConnected:
        user = UserRow(
            name=payload.name,
            lastname=payload.lastname,
            mail=payload.mail,
            password=payload.password,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            # The unique constraint on mail is the source of truth for duplicates
            if self._mail_taken(payload.mail):
                logger.debug(f"Rejected duplicate registration for {payload.mail}")
                raise DuplicateEmail() from e
            logger.error(f"Failed to create account: {e}")
            raise StorageUnavailable("Failed to create account") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create account: {e}")
            raise StorageUnavailable("Failed to create account") from e

        return UserConnected.model_validate(user)

    def _mail_taken(self, mail: str) -> bool:
        try:
            return self._first_by_mail(mail) is not None
        except SQLAlchemyError as e:
            logger.error(f"Failed to check existing mail after integrity error: {e}")
            return False

    def get_all_users(self) -> list[User]:
        try:
            rows = self.db.query(UserRow).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to get all users: {e}")
            raise StorageUnavailable("Failed to get all users") from e
        return [User.model_validate(row) for row in rows]

    def get_user_by_mail(self, mail: str) -> UserConnected | None:
        try:
            user = self._first_by_mail(mail)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get user by mail: {e}")
            raise StorageUnavailable("Failed to get user by mail") from e
        if not user:
            return None
        return UserConnected.model_validate(user)

    def get_user_by_id(self, user_id: str) -> UserConnected | None:
        try:
            user = self.db.query(UserRow).filter(UserRow.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to get user by id: {e}")
            raise StorageUnavailable("Failed to get user by id") from e
        if not user:
            return None
        return UserConnected.model_validate(user)

    def user_connect(self, credentials: UserSignIn) -> UserConnected | None:
        try:
            user = self._first_by_mail(credentials.mail)
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect user: {e}")
            raise StorageUnavailable("Failed to connect user") from e
        if not user:
            return None
        if not passwords_match(user.password, credentials.password):
            return None
        return UserConnected.model_validate(user)
