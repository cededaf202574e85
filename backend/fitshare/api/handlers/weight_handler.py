"""
Weight Log Handler

The caller's private weight log, mounted under /progress/weight.

    POST   /progress/weight              → multipart: payload (JSON) + photos
    GET    /progress/weight              → ?startDate=&endDate=&page=&limit=
    GET    /progress/weight/{entry_id}   → owner only
    PUT    /progress/weight/{entry_id}
    DELETE /progress/weight/{entry_id}
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from fitshare.api.dependencies import CurrentUser, Pagination
from fitshare.api.dependencies.services import WeightLogServiceDep
from fitshare.api.dependencies.uploads import load_payload, read_uploads
from fitshare.shared.schemas.common import ApiResponse, MessageResponse, Page
from fitshare.shared.schemas.weight import (
    WeightEntryCreate,
    WeightEntryFilters,
    WeightEntryResponse,
    WeightEntryUpdate,
)


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[WeightEntryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_weight_entry(
    current_user: CurrentUser,
    weight_service: WeightLogServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = WeightEntryCreate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    entry = await weight_service.create(current_user["user_id"], data, uploads)
    return ApiResponse(message="Weight entry created", data=entry)


@router.get("", response_model=ApiResponse[Page[WeightEntryResponse]])
async def list_weight_entries(
    current_user: CurrentUser,
    pagination: Pagination,
    weight_service: WeightLogServiceDep,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    filters = WeightEntryFilters(start_date=start_date, end_date=end_date)
    page = await weight_service.list(current_user["user_id"], filters, pagination.page, pagination.limit)
    return ApiResponse(data=page)


@router.get("/{entry_id}", response_model=ApiResponse[WeightEntryResponse])
async def get_weight_entry(
    entry_id: UUID,
    current_user: CurrentUser,
    weight_service: WeightLogServiceDep,
):
    return ApiResponse(data=await weight_service.get(entry_id, current_user["user_id"]))


@router.put("/{entry_id}", response_model=ApiResponse[WeightEntryResponse])
async def update_weight_entry(
    entry_id: UUID,
    current_user: CurrentUser,
    weight_service: WeightLogServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = WeightEntryUpdate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    entry = await weight_service.update(entry_id, current_user["user_id"], data, uploads)
    return ApiResponse(message="Weight entry updated", data=entry)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_weight_entry(
    entry_id: UUID,
    current_user: CurrentUser,
    weight_service: WeightLogServiceDep,
):
    await weight_service.delete(entry_id, current_user["user_id"])
    return MessageResponse(message="Weight entry deleted")
