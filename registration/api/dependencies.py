"""FastAPI dependencies for the user repository and controllers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from registration.controllers.create_user import CreateUserController
from registration.database import get_db
from registration.repositories.base import UserRepository
from registration.repositories.sql import SqlUserRepository
from registration.use_cases.create_new_user import CreateNewUserUseCase


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    """Get the storage-backed user repository for this request."""
    return SqlUserRepository(db)


def get_create_user_controller(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
) -> CreateUserController:
    """Get the create-user controller with its dependencies."""
    return CreateUserController(CreateNewUserUseCase(repository))
