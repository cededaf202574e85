"""
User Handler

Profile and directory endpoints.

    GET  /users                   → directory (auth, ?search=)
    PUT  /users/profile           → partial profile update
    PUT  /users/goal-weight       → set goal weight
    POST /users/profile/picture   → multipart `profilePicture`
    GET  /users/{user_id}         → public profile (auth optional)
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, File, Query, UploadFile

from fitshare.api.dependencies import CurrentUser, OptionalUser, Pagination
from fitshare.api.dependencies.services import UserServiceDep
from fitshare.api.dependencies.uploads import read_upload
from fitshare.shared.core.exceptions import ValidationError
from fitshare.shared.schemas.common import ApiResponse, Page
from fitshare.shared.schemas.user import (
    GoalWeightUpdate,
    ProfileUpdate,
    PublicUserResponse,
    UserResponse,
)


router = APIRouter()


@router.get("", response_model=ApiResponse[Page[PublicUserResponse]])
async def list_users(
    current_user: CurrentUser,
    pagination: Pagination,
    user_service: UserServiceDep,
    search: Optional[str] = Query(None, max_length=100, description="Match first or last name"),
):
    """Paginated user directory."""
    users = await user_service.list_users(
        page=pagination.page,
        limit=pagination.limit,
        search=search,
    )
    return ApiResponse(data=users)


@router.put("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(
    payload: ProfileUpdate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """Update the caller's profile fields."""
    user = await user_service.update_profile(current_user["user_id"], payload)
    return ApiResponse(message="Profile updated successfully", data=user)


@router.put("/goal-weight", response_model=ApiResponse[UserResponse])
async def set_goal_weight(
    payload: GoalWeightUpdate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """Set the caller's goal weight."""
    user = await user_service.set_goal_weight(current_user["user_id"], payload)
    return ApiResponse(message="Goal weight updated successfully", data=user)


@router.post("/profile/picture", response_model=ApiResponse[UserResponse])
async def upload_profile_picture(
    current_user: CurrentUser,
    user_service: UserServiceDep,
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
):
    """Replace the caller's profile picture."""
    if profile_picture is None or not profile_picture.filename:
        raise ValidationError("No file uploaded", errors=["profilePicture: file is required"])

    upload = await read_upload(profile_picture)
    user = await user_service.update_profile_picture(current_user["user_id"], upload)
    return ApiResponse(message="Profile picture updated successfully", data=user)


@router.get("/{user_id}", response_model=ApiResponse[PublicUserResponse])
async def get_user(
    user_id: UUID,
    current_user: OptionalUser,
    user_service: UserServiceDep,
):
    """Public profile of any user; a token is accepted but not required."""
    return ApiResponse(data=await user_service.get_public_profile(user_id))
