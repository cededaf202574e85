"""
Authentication Handler

Handles user registration, login and the current-user endpoint.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here. Errors raised by
services (409 duplicate email, 401 bad credentials) reach the client through
the global exception handlers.
"""

from fastapi import APIRouter, status

from fitshare.api.dependencies import CurrentUser
from fitshare.api.dependencies.services import AuthServiceDep, UserServiceDep
from fitshare.shared.schemas.common import ApiResponse
from fitshare.shared.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)


router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(user_data: UserCreate, auth_service: AuthServiceDep):
    """
    Register a new user.

    Creates a new user account and returns an authentication token.

    Raises:
        409: If email already registered
    """
    user, access_token, expires_in = await auth_service.register_user(user_data)

    return ApiResponse(
        message="User registered successfully",
        data=AuthResponse(
            user=UserResponse.model_validate(user),
            token=access_token,
            expires_in=expires_in,
        ),
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(credentials: UserLogin, auth_service: AuthServiceDep):
    """
    Authenticate user and return JWT token.

    Raises:
        401: If credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    return ApiResponse(
        message="Login successful",
        data=AuthResponse(
            user=UserResponse.model_validate(user),
            token=access_token,
            expires_in=expires_in,
        ),
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: CurrentUser, user_service: UserServiceDep):
    """Profile of the authenticated user."""
    return ApiResponse(data=await user_service.get_me(current_user["user_id"]))
