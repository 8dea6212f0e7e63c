# =============================================================================
# core/services/auth_service.py - Authentication Business Logic
# =============================================================================
# Registration, login, bearer token issue/resolution, profile and password
# changes, and the forgot/reset password flow.
#
# Login reports the same "Invalid credentials" error for an unknown email
# and a wrong password so the endpoint cannot be used to probe accounts.
# =============================================================================

import logging
from datetime import timedelta
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from app.auth.models import AuthUser, TokenPayload
from app.config import Settings
from app.exceptions import (
    EmailDeliveryError,
    EmailNotFoundError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    NotAuthenticatedError,
    ValidationFailedError,
)
from core.models.user import (
    LoginRequest,
    RegisterRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)
from core.services.base import BaseService
from core.services.user_service import public_user
from lib.mailer import Mailer
from lib.mongo_client import USERS
from lib.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)
from lib.utils import to_object_id, utcnow

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Service for authentication flows.

    Example:
        service = AuthService(db, settings, mailer)
        user, token = service.login(LoginRequest(email="john@gmail.com", password="123456"))
    """

    collection_name = USERS
    resource_name = "User"

    def __init__(self, db: Database, settings: Settings, mailer: Mailer | None = None):
        super().__init__(db)
        self.settings = settings
        self.mailer = mailer

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def issue_token(self, user: dict[str, Any]) -> str:
        return create_access_token(
            user_id=str(user["_id"]),
            role=user.get("role", "user"),
            secret=self.settings.JWT_SECRET,
            algorithm=self.settings.JWT_ALGORITHM,
            expires_days=self.settings.JWT_EXPIRE_DAYS,
        )

    def resolve_token(self, token: str | None) -> AuthUser:
        """
        Turn a bearer token into the current user.

        Raises:
            NotAuthenticatedError: Missing/invalid/expired token, or the user
                no longer exists
        """
        if not token:
            raise NotAuthenticatedError()

        try:
            payload = TokenPayload(**decode_access_token(
                token,
                self.settings.JWT_SECRET,
                self.settings.JWT_ALGORITHM,
            ))
        except (TokenError, ValueError) as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise NotAuthenticatedError()

        oid = to_object_id(payload.id)
        user = self.collection.find_one({"_id": oid}) if oid else None
        if not user:
            logger.warning(f"Token for missing user: {payload.id}")
            raise NotAuthenticatedError()

        return AuthUser(
            id=str(user["_id"]),
            name=user.get("name", ""),
            email=user.get("email", ""),
            role=user.get("role", "user"),
        )

    # -------------------------------------------------------------------------
    # Register / Login
    # -------------------------------------------------------------------------

    def register(self, data: RegisterRequest) -> tuple[dict[str, Any], str]:
        """
        Create a user and issue a token.

        Raises:
            pymongo.errors.DuplicateKeyError: If the email is taken
        """
        doc = data.to_document()
        doc["password"] = hash_password(doc["password"])
        doc["createdAt"] = utcnow()

        self.collection.insert_one(doc)
        logger.info(f"Registered user: {doc['_id']} ({doc['role']})")
        return public_user(doc), self.issue_token(doc)

    def login(self, data: LoginRequest) -> tuple[dict[str, Any], str]:
        """
        Check credentials and issue a token.

        Raises:
            ValidationFailedError: Email or password missing
            InvalidCredentialsError: Unknown email or wrong password
        """
        if not data.email or not data.password:
            raise ValidationFailedError("Please provide an email and password")

        user = self.collection.find_one({"email": data.email})
        if not user or not verify_password(data.password, user.get("password")):
            logger.warning(f"Failed login for {data.email}")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {user['_id']}")
        return public_user(user), self.issue_token(user)

    # -------------------------------------------------------------------------
    # Current user
    # -------------------------------------------------------------------------

    def get_me(self, actor: AuthUser) -> dict[str, Any]:
        return public_user(self.find_or_404(actor.id))

    def update_details(self, actor: AuthUser, data: UpdateDetailsRequest) -> dict[str, Any]:
        """Change the current user's name and/or email."""
        update = {
            key: value
            for key, value in data.to_document(exclude_unset=True).items()
            if value is not None
        }
        if not update:
            return self.get_me(actor)

        updated = self.collection.find_one_and_update(
            {"_id": self.parse_id(actor.id)},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"User {actor.id} updated details: {', '.join(update)}")
        return public_user(updated)

    def update_password(self, actor: AuthUser, data: UpdatePasswordRequest) -> tuple[dict[str, Any], str]:
        """
        Change the current user's password and issue a fresh token.

        Raises:
            NotAuthenticatedError: If the current password is wrong
        """
        user = self.find_or_404(actor.id)
        if not verify_password(data.current_password, user.get("password")):
            logger.warning(f"User {actor.id} gave a wrong current password")
            raise NotAuthenticatedError("Password is incorrect")

        self.collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"password": hash_password(data.new_password)}},
        )
        logger.info(f"User {actor.id} changed password")
        return public_user(user), self.issue_token(user)

    # -------------------------------------------------------------------------
    # Forgot / Reset password
    # -------------------------------------------------------------------------

    def forgot_password(self, email: str, base_url: str) -> None:
        """
        Email a one-time reset link.

        Only the SHA-256 hash of the token is stored. If the email cannot be
        sent the token fields are cleared again.

        Raises:
            EmailNotFoundError: No user with that email
            EmailDeliveryError: The mail could not be sent
        """
        user = self.collection.find_one({"email": email})
        if not user:
            raise EmailNotFoundError(email)

        raw_token, hashed_token = generate_reset_token()
        expires = utcnow() + timedelta(minutes=self.settings.RESET_TOKEN_EXPIRE_MINUTES)
        self.collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"resetPasswordToken": hashed_token, "resetPasswordExpire": expires}},
        )

        reset_url = f"{base_url.rstrip('/')}/api/v1/auth/resetpassword/{raw_token}"
        body = (
            "You are receiving this email because you (or someone else) has requested "
            f"the reset of a password. Please make a PUT request to:\n\n{reset_url}"
        )

        try:
            if self.mailer is None:
                raise EmailDeliveryError("No mailer configured")
            self.mailer.send(to=user["email"], subject="Password reset token", body=body)
        except EmailDeliveryError:
            self.collection.update_one(
                {"_id": user["_id"]},
                {"$unset": {"resetPasswordToken": "", "resetPasswordExpire": ""}},
            )
            raise

        logger.info(f"Password reset requested for user: {user['_id']}")

    def reset_password(self, raw_token: str, password: str) -> tuple[dict[str, Any], str]:
        """
        Set a new password using an emailed reset token.

        Raises:
            InvalidResetTokenError: Unknown or expired token
        """
        user = self.collection.find_one({
            "resetPasswordToken": hash_reset_token(raw_token),
            "resetPasswordExpire": {"$gt": utcnow()},
        })
        if not user:
            raise InvalidResetTokenError()

        self.collection.update_one(
            {"_id": user["_id"]},
            {
                "$set": {"password": hash_password(password)},
                "$unset": {"resetPasswordToken": "", "resetPasswordExpire": ""},
            },
        )
        logger.info(f"Password reset for user: {user['_id']}")
        return public_user(user), self.issue_token(user)
