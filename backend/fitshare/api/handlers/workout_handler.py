"""
Workout Handler

    POST   /workouts              → multipart: payload (JSON) + photos
    GET    /workouts              → ?userId=&split=&startDate=&endDate=&page=&limit=
    GET    /workouts/{id}
    PUT    /workouts/{id}         → multipart: payload (partial JSON) + photos
    DELETE /workouts/{id}

Writes are owner-only; the service raises 403 for anyone else.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from fitshare.api.dependencies import CurrentUser, Pagination
from fitshare.api.dependencies.services import WorkoutServiceDep
from fitshare.api.dependencies.uploads import load_payload, read_uploads
from fitshare.shared.models.enums import WorkoutSplit
from fitshare.shared.schemas.common import ApiResponse, MessageResponse, Page
from fitshare.shared.schemas.workout import (
    WorkoutCreate,
    WorkoutFilters,
    WorkoutResponse,
    WorkoutUpdate,
)


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[WorkoutResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_workout(
    current_user: CurrentUser,
    workout_service: WorkoutServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    """Log a workout with optional photos."""
    data = WorkoutCreate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    workout = await workout_service.create(current_user["user_id"], data, uploads)
    return ApiResponse(message="Workout created successfully", data=workout)


@router.get("", response_model=ApiResponse[Page[WorkoutResponse]])
async def list_workouts(
    current_user: CurrentUser,
    pagination: Pagination,
    workout_service: WorkoutServiceDep,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    split: Optional[WorkoutSplit] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    """The caller's workouts (or `userId`'s), newest first."""
    filters = WorkoutFilters(user_id=user_id, split=split, start_date=start_date, end_date=end_date)
    page = await workout_service.list(current_user["user_id"], filters, pagination.page, pagination.limit)
    return ApiResponse(data=page)


@router.get("/{workout_id}", response_model=ApiResponse[WorkoutResponse])
async def get_workout(
    workout_id: UUID,
    current_user: CurrentUser,
    workout_service: WorkoutServiceDep,
):
    return ApiResponse(data=await workout_service.get(workout_id))


@router.put("/{workout_id}", response_model=ApiResponse[WorkoutResponse])
async def update_workout(
    workout_id: UUID,
    current_user: CurrentUser,
    workout_service: WorkoutServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    """Partial update; `removedPhotos` in the payload detaches stored photos."""
    data = WorkoutUpdate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    workout = await workout_service.update(workout_id, current_user["user_id"], data, uploads)
    return ApiResponse(message="Workout updated successfully", data=workout)


@router.delete("/{workout_id}", response_model=MessageResponse)
async def delete_workout(
    workout_id: UUID,
    current_user: CurrentUser,
    workout_service: WorkoutServiceDep,
):
    await workout_service.delete(workout_id, current_user["user_id"])
    return MessageResponse(message="Workout deleted successfully")
