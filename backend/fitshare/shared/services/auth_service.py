"""
Authentication Service

Business logic for user registration and login.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- Utilities (password hashing, token signing)
- Domain rules (unique email, credential checks)

Usage:
======
    from fitshare.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires = await service.register_user(payload)
"""

from datetime import timedelta
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.config.settings import settings
from fitshare.shared.core.exceptions import AuthenticationError, DuplicateResourceError
from fitshare.shared.core.logging import get_logger
from fitshare.shared.models.user import User
from fitshare.shared.repositories.user_repository import UserRepository
from fitshare.shared.schemas.user import UserCreate
from fitshare.shared.utils.security import SecurityUtils

logger = get_logger("auth")


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration
    - User authentication (login)
    - JWT token generation

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize AuthService.

        Args:
            session: Async database session
        """
        self.session = session
        self.repo = UserRepository(session)

    @staticmethod
    def issue_token(user: User) -> Tuple[str, int]:
        """
        Sign a bearer token for the user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def register_user(self, payload: UserCreate) -> Tuple[User, str, int]:
        """
        Register a new user.

        Args:
            payload: Validated registration body (email already lowercased)

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: If email already registered
        """
        if await self.repo.email_exists(payload.email):
            raise DuplicateResourceError("User already exists with this email")

        try:
            user = await self.repo.create(
                email=payload.email,
                password_hash=SecurityUtils.hash_password(payload.password),
                first_name=payload.first_name,
                last_name=payload.last_name,
                age=payload.age,
                height=payload.height,
                weight=payload.weight,
            )
        except IntegrityError as e:
            # A concurrent registration won the race past email_exists
            raise DuplicateResourceError("User already exists with this email") from e

        access_token, expires_in = self.issue_token(user)
        logger.info("User registered", user_id=str(user.id))
        return user, access_token, expires_in

    async def login_user(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate user and generate token.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        if not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        access_token, expires_in = self.issue_token(user)
        logger.info("User logged in", user_id=str(user.id))
        return user, access_token, expires_in
