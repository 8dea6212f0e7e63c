# =============================================================================
# core/models/user.py - User and Auth Schemas
# =============================================================================
# Passwords arrive in plain text on these models and are hashed by the
# services before anything is written. The stored `password`,
# `resetPasswordToken` and `resetPasswordExpire` fields are never returned.
# =============================================================================

from typing import Annotated, Literal

from pydantic import AfterValidator, EmailStr, Field

from .base import CamelModel

Role = Literal["user", "publisher", "admin"]

# Roles a user may pick for themselves at registration
SelfServiceRole = Literal["user", "publisher"]

# Stored fields stripped from every response
HIDDEN_USER_FIELDS = ("password", "resetPasswordToken", "resetPasswordExpire")

USER_FILTER_FIELDS: dict[str, type] = {
    "name": str,
    "email": str,
    "role": str,
}


def normalize_email(value: str | None) -> str | None:
    """Emails are stored and looked up trimmed and lower-cased."""
    if value is None:
        return value
    return value.strip().lower()


# Validated email in its stored form
UserEmail = Annotated[EmailStr, AfterValidator(normalize_email)]


class UserBase(CamelModel):
    """Profile fields; also used to re-validate merged admin updates."""

    name: str = Field(..., min_length=1)
    email: UserEmail
    role: Role = "user"


class UserCreate(UserBase):
    """Admin-created user. Any role is allowed."""

    password: str = Field(..., min_length=6)


class RegisterRequest(UserCreate):
    """
    Self-registration.

    Example:
        {"name": "John Doe", "email": "john@gmail.com", "password": "123456", "role": "publisher"}
    """

    role: SelfServiceRole = "user"


class UserUpdate(CamelModel):
    """Admin update of any user field."""

    name: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, min_length=6)
    role: str | None = None


class LoginRequest(CamelModel):
    """Email and password are checked by the service so a missing one is a 400."""

    email: Annotated[str | None, AfterValidator(normalize_email)] = None
    password: str | None = None


class UpdateDetailsRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    email: UserEmail | None = None


class UpdatePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class ForgotPasswordRequest(CamelModel):
    email: UserEmail


class ResetPasswordRequest(CamelModel):
    password: str = Field(..., min_length=6)
