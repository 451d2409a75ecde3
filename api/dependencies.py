"""FastAPI dependencies for dependency injection."""

from fastapi import HTTPException, Request, status

from core.middleware.authentication import get_current_user
from core.security import AuthenticatedUser


async def require_authenticated_user(request: Request) -> AuthenticatedUser:
    """
    Require user to be authenticated.
    The user is set on the request state by the authentication middleware.
    """
    user = get_current_user(request)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user
