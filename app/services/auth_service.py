"""Register and login: user service lookups plus token minting."""

import logging

from app.core.exceptions import ConflictError, InvalidCredentialsError
from app.core.security import create_access_token
from app.schemas.user import UserCreate
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def register(service: UserService, name: str, email: str, password: str) -> str:
    """
    Create a user and return a token for it, so registration always ends in a session.

    Raises ConflictError if the email is already registered.
    """
    if service.get_by_email(email) is not None:
        raise ConflictError("Email already registered.")
    user = service.create(UserCreate(name=name, email=email, password=password))
    return create_access_token(user_id=user.id, email=user.email)


def login(service: UserService, email: str, password: str) -> str:
    """Return a token for valid credentials. Raises InvalidCredentialsError otherwise."""
    user = service.verify_credentials(email, password)
    if user is None:
        logger.info("Login rejected")
        raise InvalidCredentialsError()
    return create_access_token(user_id=user.id, email=user.email)
