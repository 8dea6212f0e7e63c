# =============================================================================
# lib/security.py - Password Hashing and Bearer Tokens
# =============================================================================
# Thin wrappers over passlib (bcrypt) and python-jose (HS256 JWT).
#
# Tokens carry:
#   id   - the user's ObjectId as a hex string
#   role - the user's role at issue time
#   exp  - expiry timestamp
# =============================================================================

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt, JWTError
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Raised when a bearer token cannot be decoded or has expired."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(
    user_id: str,
    role: str,
    secret: str,
    algorithm: str = "HS256",
    expires_days: int = 30,
) -> str:
    """
    Sign a bearer token for a user.

    Args:
        user_id: User ObjectId as a string
        role: User role (user, publisher, admin)
        secret: Signing secret
        algorithm: JWT algorithm
        expires_days: Lifetime of the token

    Returns:
        Encoded JWT
    """
    expire = datetime.now(timezone.utc) + timedelta(days=expires_days)
    payload = {"id": user_id, "role": role, "exp": expire}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Verify and decode a bearer token.

    Raises:
        TokenError: If the signature is invalid, the token expired, or the
            `id` claim is missing
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise TokenError(str(e)) from e

    if not payload.get("id"):
        raise TokenError("Token missing 'id' claim")
    return payload


def generate_reset_token() -> tuple[str, str]:
    """
    Create a password reset token.

    Returns:
        (raw_token, hashed_token) - the raw token is emailed, only the
        SHA-256 hash is stored
    """
    raw = secrets.token_hex(20)
    return raw, hash_reset_token(raw)


def hash_reset_token(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
