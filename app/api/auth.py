"""Register and login endpoints. Both return a JWT for use as: Authorization: Bearer <token>"""

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.deps import UserServiceDep
from app.core.exceptions import ConflictError, InvalidCredentialsError, ValidationError
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.services import auth_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, service: UserServiceDep) -> TokenResponse:
    """Create an account and return a token for it. 400 if the email is already registered."""
    try:
        token = auth_service.register(service, body.name, body.email, body.password)
    except (ConflictError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except Exception as e:
        logger.exception("Registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        ) from e
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, service: UserServiceDep) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Unknown email and wrong password give the same 400 response.
    """
    try:
        token = auth_service.login(service, body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except Exception as e:
        logger.exception("Login failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in",
        ) from e
    return TokenResponse(token=token)
