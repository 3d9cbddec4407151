"""User model."""

from uuid import uuid4

from sqlalchemy import Column, String

from registration.database import Base
from registration.models.mixins import TimestampMixin


def generate_user_id() -> str:
    """Generate an opaque identifier for a new user."""
    return str(uuid4())


class User(Base, TimestampMixin):
    """Registered user.

    The password is stored as submitted; it never leaves the repository layer.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_user_id)
    name = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    mail = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, mail={self.mail})>"
