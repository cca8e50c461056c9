"""Users CRUD endpoints. Every route requires a valid bearer token."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from app.api.deps import CurrentUserDep, UserServiceDep
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


def _server_error(message: str) -> HTTPException:
    """Log the exception being handled and return a generic 500 for it."""
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


def _email_taken() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")


@router.get("", response_model=list[UserRead])
def list_users(service: UserServiceDep, _user: CurrentUserDep) -> list[UserRead]:
    """Return all users, sanitized."""
    try:
        return service.list_users()
    except Exception as e:
        raise _server_error("Failed to retrieve users") from e


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, service: UserServiceDep, _user: CurrentUserDep) -> UserRead:
    try:
        user = service.get_by_id(user_id)
    except Exception as e:
        raise _server_error("Failed to retrieve user") from e
    if user is None:
        raise _not_found()
    return user


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, service: UserServiceDep, _user: CurrentUserDep) -> UserRead:
    """Create a user on behalf of an authenticated caller. 409 if the email is taken."""
    try:
        existing = service.get_by_email(body.email)
    except Exception as e:
        raise _server_error("Failed to create user") from e
    if existing is not None:
        raise _email_taken()

    try:
        return service.create(body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except Exception as e:
        raise _server_error("Failed to create user") from e


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    body: UserUpdate,
    service: UserServiceDep,
    _user: CurrentUserDep,
) -> UserRead:
    """
    Update name, email and/or role. Fields left out of the body are unchanged.

    404 if the user does not exist; 409 if the new email belongs to another user.
    """
    try:
        current = service.get_by_id(user_id)
        other = None
        if current is not None and body.email is not None and body.email != current.email:
            other = service.get_by_email(body.email)
    except Exception as e:
        raise _server_error("Failed to update user") from e
    if current is None:
        raise _not_found()
    if other is not None and other.id != user_id:
        raise _email_taken()

    try:
        return service.update(user_id, body)
    except NotFoundError as e:
        raise _not_found() from e
    except Exception as e:
        raise _server_error("Failed to update user") from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserServiceDep, _user: CurrentUserDep) -> Response:
    try:
        exists = service.get_by_id(user_id) is not None
    except Exception as e:
        raise _server_error("Failed to delete user") from e
    if not exists:
        raise _not_found()

    try:
        service.delete(user_id)
    except NotFoundError as e:
        raise _not_found() from e
    except Exception as e:
        raise _server_error("Failed to delete user") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
