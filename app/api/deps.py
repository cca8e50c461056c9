"""Route dependencies: the per-app user service and the bearer-token check."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser
from app.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def get_user_service(request: Request) -> UserService:
    """Dependency: the UserService created with the app (one store per app instance)."""
    return request.app.state.user_service


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the caller from its claims.

    401 when no token is sent, 403 when it is invalid or expired. Validity is
    purely the signature and expiry; the store is not consulted.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token.",
        )
    return CurrentUser(id=user_id, email=str(payload.get("email", "")))


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
