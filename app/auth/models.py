# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    The user attached to a request by the auth dependency.

    Resolved from the database on every request, so a deleted user or a
    changed role takes effect immediately.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenPayload(BaseModel):
    """Decoded bearer token claims."""
    id: str
    role: str | None = None
    exp: int
