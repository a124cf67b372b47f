"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. Signed login tokens (python-jose, HS256 by default)
3. Constant-time password verification

Tokens carry the user's identity as ``{"username": ..., "id": ...}``.
They do not expire unless ACCESS_TOKEN_EXPIRE_MINUTES is configured.

Usage:
    from app.services.security import get_token_service

    tokens = get_token_service()
    value = tokens.issue({"username": "mluukkai", "id": "1"})
    claims = tokens.verify(value)
"""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.services.errors import InvalidCredentialError

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# - schemes: bcrypt is the only accepted scheme
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Tokens
# -------------------------------------------------------------------------
class TokenService:
    """
    Issues and verifies signed login tokens.

    The signing key and lifetime are passed in at construction, so the
    service holds no reference to global configuration. Use
    get_token_service() for the instance built from the application settings.

    Args:
        secret_key: HMAC key used to sign tokens
        algorithm: JWT algorithm name
        expire_minutes: Token lifetime; None issues tokens that never expire
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ):
        if not secret_key:
            raise ValueError("A secret key is required to sign tokens")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: dict[str, Any]) -> str:
        """
        Sign the given claims.

        Returns:
            Encoded JWT string (header.payload.signature)

        Example:
            >>> token = tokens.issue({"username": "mluukkai", "id": "1"})
            >>> token.count(".")
            2
        """
        to_encode = dict(claims)
        if self.expire_minutes is not None:
            to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=self.expire_minutes)

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Check a token's signature (and expiry, if it has one) and decode it.

        Returns:
            The claims the token was issued with (plus ``exp`` when set)

        Raises:
            InvalidCredentialError: If the token is malformed, signed with
                another key or expired
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidCredentialError(str(e)) from e


@lru_cache
def get_token_service() -> TokenService:
    """Token service configured from the application settings."""
    settings = get_settings()
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
