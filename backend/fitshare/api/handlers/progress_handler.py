"""
Progress Handler

    POST   /progress              → multipart: payload (tagged JSON) + photos
    GET    /progress              → ?userId=&type=&startDate=&endDate=&page=&limit=
    GET    /progress/{id}
    PUT    /progress/{id}
    DELETE /progress/{id}

The create payload's `type` selects the variant:

    {"type": "weight", "weight": 181.2}
    {"type": "pr", "exercise": "Squat", "prValue": 315}
    {"type": "measurement", "measurement": {"waist": 32}}
    {"type": "photo"}   + at least one file in `photos`
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from fitshare.api.dependencies import CurrentUser, Pagination
from fitshare.api.dependencies.services import ProgressServiceDep
from fitshare.api.dependencies.uploads import load_payload, read_uploads
from fitshare.shared.models.enums import ProgressType
from fitshare.shared.schemas.common import ApiResponse, MessageResponse, Page
from fitshare.shared.schemas.progress import (
    ProgressFilters,
    ProgressResponse,
    ProgressUpdate,
    parse_progress_payload,
)


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ProgressResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_progress(
    current_user: CurrentUser,
    progress_service: ProgressServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = parse_progress_payload(load_payload(payload))
    uploads = await read_uploads(photos)

    entry = await progress_service.create(current_user["user_id"], data, uploads)
    return ApiResponse(message="Progress entry created successfully", data=entry)


@router.get("", response_model=ApiResponse[Page[ProgressResponse]])
async def list_progress(
    current_user: CurrentUser,
    pagination: Pagination,
    progress_service: ProgressServiceDep,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    progress_type: Optional[ProgressType] = Query(None, alias="type"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    filters = ProgressFilters(user_id=user_id, type=progress_type, start_date=start_date, end_date=end_date)
    page = await progress_service.list(current_user["user_id"], filters, pagination.page, pagination.limit)
    return ApiResponse(data=page)


@router.get("/{progress_id}", response_model=ApiResponse[ProgressResponse])
async def get_progress(
    progress_id: UUID,
    current_user: CurrentUser,
    progress_service: ProgressServiceDep,
):
    return ApiResponse(data=await progress_service.get(progress_id))


@router.put("/{progress_id}", response_model=ApiResponse[ProgressResponse])
async def update_progress(
    progress_id: UUID,
    current_user: CurrentUser,
    progress_service: ProgressServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = ProgressUpdate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    entry = await progress_service.update(progress_id, current_user["user_id"], data, uploads)
    return ApiResponse(message="Progress entry updated successfully", data=entry)


@router.delete("/{progress_id}", response_model=MessageResponse)
async def delete_progress(
    progress_id: UUID,
    current_user: CurrentUser,
    progress_service: ProgressServiceDep,
):
    await progress_service.delete(progress_id, current_user["user_id"])
    return MessageResponse(message="Progress entry deleted successfully")
