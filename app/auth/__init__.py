# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication and role authorization.
#
# - models.py: AuthUser (the user attached to a request), TokenPayload
# - dependencies.py: get_current_user, authorize(*roles)
# - routes.py: /api/v1/auth endpoints
#
# Usage:
#   from app.auth.dependencies import get_current_user, authorize
#   from app.auth.models import AuthUser
# =============================================================================

from app.auth.models import AuthUser, TokenPayload

__all__ = [
    "AuthUser",
    "TokenPayload",
]
