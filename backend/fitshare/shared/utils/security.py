"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
passlib CryptContext with bcrypt (random salt, hash embeds the salt).

JWT Tokens:
===========
PyJWT, HS256. Claims: user_id, email, iat, exp. `iat` is what lets the auth
dependency reject every token minted before the current process started.

Usage:
======
    from fitshare.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("correct horse battery")
    SecurityUtils.verify_password("correct horse battery", hashed)  # True

    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id), "email": user.email},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """
    Security utilities for authentication.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against bcrypt hash.

        Returns:
            True if password matches, False otherwise
        """
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict[str, Any],
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
        issued_at: Optional[datetime] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload claims (user_id, email)
            secret_key: Secret key for signing
            expires_delta: Lifetime (default: 7 days)
            algorithm: JWT algorithm (default: HS256)
            issued_at: Override for the `iat` claim (default: now)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        issued = issued_at or datetime.now(timezone.utc)
        expire = issued + (expires_delta or timedelta(days=7))

        to_encode.update({
            "exp": expire,
            "iat": issued,
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict[str, Any]:
        """
        Decode and verify JWT token.

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
