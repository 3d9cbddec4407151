"""User API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from registration.api.dependencies import get_create_user_controller, get_user_repository
from registration.controllers.create_user import CreateUserController
from registration.errors import ErrorKind, NotFound, RegistrationError
from registration.repositories.base import UserRepository
from registration.schemas.user import ErrorResponse, UserConnected, UserSignIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

# Failures the caller can fix; everything else is a server error
CLIENT_ERROR_KINDS = {ErrorKind.VALIDATION_FAILED, ErrorKind.DUPLICATE_EMAIL}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


def status_for(kind: ErrorKind | None) -> int:
    """Map an error kind to an HTTP status code."""
    if kind in CLIENT_ERROR_KINDS:
        return status.HTTP_400_BAD_REQUEST
    if kind == ErrorKind.NOT_FOUND:
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserConnected,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_user(
    request: Request,
    controller: Annotated[CreateUserController, Depends(get_create_user_controller)],
):
    """Register a new user."""
    try:
        body = await request.json()
        result = controller.handle(body)
    except Exception as e:
        logger.exception("Create user request failed")
        return error_response(
            str(e) or "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if not result.success:
        return error_response(
            result.error or "Failed to create user", status_for(result.error_kind)
        )

    return JSONResponse(result.data.model_dump(), status_code=status.HTTP_201_CREATED)


@router.get("", response_model=list[UserConnected])
async def list_users(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
):
    """List every registered user, without passwords."""
    try:
        users = repository.get_all_users()
    except RegistrationError as e:
        return error_response(e.message, status_for(e.kind))
    return [user.to_connected() for user in users]


@router.post(
    "/connect",
    response_model=UserConnected,
    responses={401: {"model": ErrorResponse}},
)
async def connect_user(
    credentials: UserSignIn,
    repository: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Check an email and password pair."""
    try:
        user = repository.user_connect(credentials)
    except RegistrationError as e:
        return error_response(e.message, status_for(e.kind))
    if not user:
        return error_response("Invalid credentials", status.HTTP_401_UNAUTHORIZED)
    return user


@router.get("/{user_id}", response_model=UserConnected, responses={404: {"model": ErrorResponse}})
async def get_user(
    user_id: str,
    repository: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Get a user by identifier."""
    try:
        user = repository.get_user_by_id(user_id)
        if not user:
            raise NotFound()
    except RegistrationError as e:
        return error_response(e.message, status_for(e.kind))
    return user
