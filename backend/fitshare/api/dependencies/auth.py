"""
Authentication Dependencies

FastAPI dependencies for bearer-token authentication.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and verify JWT from header
           │
           ▼
    get_current_user()        ← {"user_id": UUID, "email": str}

    get_optional_user()       ← Same, or None; never fails

Session Lifetime:
=================
Tokens carry `iat`. Any token issued before the running process started
(`app.state.started_at`) is rejected, so a restart signs everyone out.

Type Aliases:
=============
    CurrentUser   - Authenticated user (401 otherwise)
    OptionalUser  - Authenticated user or None

Usage:
======
    from fitshare.api.dependencies.auth import CurrentUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user["user_id"]
"""

from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitshare.config.settings import settings
from fitshare.shared.core.exceptions import AuthenticationError
from fitshare.shared.utils.security import SecurityUtils


# auto_error=False: a missing header is reported as 401 by us, not 403 by FastAPI
security = HTTPBearer(auto_error=False)


def verify_token(token: str, started_at: int = 0) -> dict[str, Any]:
    """
    Verify a bearer token and return the acting user.

    Raises:
        AuthenticationError: Bad signature, expired, stale, or malformed claims
    """
    try:
        payload = SecurityUtils.decode_access_token(
            token,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e

    if int(payload.get("iat", 0)) < started_at:
        raise AuthenticationError("Session expired, please log in again")

    try:
        user_id = UUID(str(payload.get("user_id")))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    return {
        "user_id": user_id,
        "email": payload.get("email"),
    }


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing or not a bearer token
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Authorization header required")
    return credentials.credentials


async def get_current_user(
    request: Request,
    token: Annotated[str, Depends(get_current_user_token)],
) -> dict[str, Any]:
    """
    Get current authenticated user from token.

    Returns:
        {"user_id": UUID, "email": str}
    """
    return verify_token(token, started_at=getattr(request.app.state, "started_at", 0))


async def get_optional_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[dict[str, Any]]:
    """
    Acting user when a valid token is present, None otherwise.

    Never raises: a missing, expired or forged token just means anonymous.
    """
    if not credentials or not credentials.credentials:
        return None
    try:
        return verify_token(
            credentials.credentials,
            started_at=getattr(request.app.state, "started_at", 0),
        )
    except AuthenticationError:
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[dict, Depends(get_current_user)]
OptionalUser = Annotated[Optional[dict], Depends(get_optional_user)]
