# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Register, login/logout, current-user profile and password management.
# Successful logins set an httponly `token` cookie in addition to returning
# the token in the body.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.auth.dependencies import TOKEN_COOKIE, get_current_user
from app.auth.models import AuthUser
from app.config import Settings
from app.dependencies import AuthServiceDep, ContextDep
from core.models.user import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)
from lib.utils import serialize_document

logger = logging.getLogger(__name__)

router = APIRouter()


def send_token_response(token: str, settings: Settings, status_code: int = 200) -> JSONResponse:
    """Return the token in the body and as an httponly cookie."""
    response = JSONResponse(
        status_code=status_code,
        content={"success": True, "token": token},
    )
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        max_age=settings.JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.post("/register")
def register(payload: RegisterRequest, auth: AuthServiceDep, ctx: ContextDep):
    """
    Register a user.

    Role may be "user" or "publisher"; admins are created through /users.
    """
    _, token = auth.register(payload)
    return send_token_response(token, ctx.settings)


@router.post("/login")
def login(payload: LoginRequest, auth: AuthServiceDep, ctx: ContextDep):
    """
    Log in with email and password.

    Raises:
        400: Email or password missing
        401: Invalid credentials (same message for unknown email and wrong password)
    """
    _, token = auth.login(payload)
    return send_token_response(token, ctx.settings)


@router.get("/logout")
def logout(user: AuthUser = Depends(get_current_user)):
    """Overwrite the token cookie with a value that expires in 10 seconds."""
    response = JSONResponse(content={"success": True, "data": {}})
    response.set_cookie(key=TOKEN_COOKIE, value="none", max_age=10, httponly=True)
    logger.info(f"User logged out: {user.id}")
    return response


@router.get("/me")
def get_me(auth: AuthServiceDep, user: AuthUser = Depends(get_current_user)):
    """Get the current user's profile."""
    return {"success": True, "data": serialize_document(auth.get_me(user))}


@router.put("/updatedetails")
def update_details(
    payload: UpdateDetailsRequest,
    auth: AuthServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Update the current user's name and email."""
    return {"success": True, "data": serialize_document(auth.update_details(user, payload))}


@router.put("/updatepassword")
def update_password(
    payload: UpdatePasswordRequest,
    auth: AuthServiceDep,
    ctx: ContextDep,
    user: AuthUser = Depends(get_current_user),
):
    """Change the current user's password; returns a fresh token."""
    _, token = auth.update_password(user, payload)
    return send_token_response(token, ctx.settings)


@router.post("/forgotpassword")
def forgot_password(payload: ForgotPasswordRequest, request: Request, auth: AuthServiceDep):
    """Email a password reset link."""
    auth.forgot_password(payload.email, str(request.base_url))
    return {"success": True, "data": "Email sent"}


@router.put("/resetpassword/{resettoken}")
def reset_password(
    resettoken: str,
    payload: ResetPasswordRequest,
    auth: AuthServiceDep,
    ctx: ContextDep,
):
    """Set a new password using the emailed token."""
    _, token = auth.reset_password(resettoken, payload.password)
    return send_token_response(token, ctx.settings)
