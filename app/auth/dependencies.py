# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role authorization.
#
# The bearer token is read from the Authorization header, falling back to
# the `token` cookie set at login.
#
# Usage:
#   from app.auth.dependencies import get_current_user, authorize
#
#   @router.post("")
#   def create(user: AuthUser = Depends(authorize("publisher", "admin"))):
#       ...
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.dependencies import AuthServiceDep
from app.exceptions import ForbiddenError

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

# HTTP Bearer token extractor; missing headers fall through to the cookie
security_optional = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> AuthUser:
    """
    Resolve the user making the request.

    Raises:
        NotAuthenticatedError: 401 if no valid token is supplied
    """
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    return auth.resolve_token(token)


def authorize(*roles: str) -> Callable[..., AuthUser]:
    """
    Build a dependency that only lets the listed roles through.

    Raises:
        ForbiddenError: 403 if the user's role is not in `roles`
    """

    def role_checker(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in roles:
            logger.warning(f"User {user.id} with role {user.role} denied (needs {roles})")
            raise ForbiddenError(f"User role {user.role} is not authorized to access this route")
        return user

    return role_checker
