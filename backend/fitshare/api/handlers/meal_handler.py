"""
Meal Handler

    POST   /meals                 → multipart: payload (JSON) + photos
    GET    /meals                 → ?userId=&mealType=&startDate=&endDate=&page=&limit=
    GET    /meals/{id}
    PUT    /meals/{id}
    DELETE /meals/{id}
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from fitshare.api.dependencies import CurrentUser, Pagination
from fitshare.api.dependencies.services import MealServiceDep
from fitshare.api.dependencies.uploads import load_payload, read_uploads
from fitshare.shared.models.enums import MealType
from fitshare.shared.schemas.common import ApiResponse, MessageResponse, Page
from fitshare.shared.schemas.meal import MealCreate, MealFilters, MealResponse, MealUpdate


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[MealResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_meal(
    current_user: CurrentUser,
    meal_service: MealServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = MealCreate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    meal = await meal_service.create(current_user["user_id"], data, uploads)
    return ApiResponse(message="Meal created successfully", data=meal)


@router.get("", response_model=ApiResponse[Page[MealResponse]])
async def list_meals(
    current_user: CurrentUser,
    pagination: Pagination,
    meal_service: MealServiceDep,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    filters = MealFilters(user_id=user_id, meal_type=meal_type, start_date=start_date, end_date=end_date)
    page = await meal_service.list(current_user["user_id"], filters, pagination.page, pagination.limit)
    return ApiResponse(data=page)


@router.get("/{meal_id}", response_model=ApiResponse[MealResponse])
async def get_meal(
    meal_id: UUID,
    current_user: CurrentUser,
    meal_service: MealServiceDep,
):
    return ApiResponse(data=await meal_service.get(meal_id))


@router.put("/{meal_id}", response_model=ApiResponse[MealResponse])
async def update_meal(
    meal_id: UUID,
    current_user: CurrentUser,
    meal_service: MealServiceDep,
    payload: str = Form("{}"),
    photos: Optional[list[UploadFile]] = File(None),
):
    data = MealUpdate.model_validate(load_payload(payload))
    uploads = await read_uploads(photos)

    meal = await meal_service.update(meal_id, current_user["user_id"], data, uploads)
    return ApiResponse(message="Meal updated successfully", data=meal)


@router.delete("/{meal_id}", response_model=MessageResponse)
async def delete_meal(
    meal_id: UUID,
    current_user: CurrentUser,
    meal_service: MealServiceDep,
):
    await meal_service.delete(meal_id, current_user["user_id"])
    return MessageResponse(message="Meal deleted successfully")
