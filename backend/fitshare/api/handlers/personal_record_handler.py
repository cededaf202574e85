"""
Personal Record Handler

PR exercise catalog and history, mounted under /progress/pr.

    GET    /progress/pr/exercises                  → caller's catalog, A to Z
    POST   /progress/pr/exercises                  → {"name", "unit"?} (201, 409 on duplicate)
    PUT    /progress/pr/exercises/{exercise_id}    → rename / change unit
    DELETE /progress/pr/exercises/{exercise_id}    → deletes its records too
    GET    /progress/pr/progress/{exercise_id}     → {exercise, prs, current}
    POST   /progress/pr/progress                   → {"exerciseId", "value"} (201)
    DELETE /progress/pr/progress/{record_id}
"""

from uuid import UUID

from fastapi import APIRouter, status

from fitshare.api.dependencies import CurrentUser
from fitshare.api.dependencies.services import PersonalRecordServiceDep
from fitshare.shared.schemas.common import ApiResponse, MessageResponse
from fitshare.shared.schemas.personal_record import (
    PRExerciseCreate,
    PRExerciseResponse,
    PRExerciseUpdate,
    PRHistory,
    PRRecordCreate,
    PRRecordResponse,
)


router = APIRouter()


@router.get("/exercises", response_model=ApiResponse[list[PRExerciseResponse]])
async def list_exercises(
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    return ApiResponse(data=await pr_service.list_exercises(current_user["user_id"]))


@router.post(
    "/exercises",
    response_model=ApiResponse[PRExerciseResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_exercise(
    payload: PRExerciseCreate,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    """
    Raises:
        409: The caller already tracks an exercise with this name
    """
    exercise = await pr_service.create_exercise(current_user["user_id"], payload)
    return ApiResponse(message="Exercise created", data=exercise)


@router.put("/exercises/{exercise_id}", response_model=ApiResponse[PRExerciseResponse])
async def update_exercise(
    exercise_id: UUID,
    payload: PRExerciseUpdate,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    """
    Raises:
        400: Unit change after PRs have been recorded
        403: Not the owner
    """
    exercise = await pr_service.update_exercise(exercise_id, current_user["user_id"], payload)
    return ApiResponse(message="Exercise updated", data=exercise)


@router.delete("/exercises/{exercise_id}", response_model=MessageResponse)
async def delete_exercise(
    exercise_id: UUID,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    await pr_service.delete_exercise(exercise_id, current_user["user_id"])
    return MessageResponse(message="Exercise deleted")


@router.get("/progress/{exercise_id}", response_model=ApiResponse[PRHistory])
async def get_history(
    exercise_id: UUID,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    return ApiResponse(data=await pr_service.history(exercise_id, current_user["user_id"]))


@router.post(
    "/progress",
    response_model=ApiResponse[PRRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
async def record_pr(
    payload: PRRecordCreate,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    """
    Raises:
        400: Value not positive, or fractional for a reps/time exercise
    """
    pr = await pr_service.record(current_user["user_id"], payload)
    return ApiResponse(message="PR recorded", data=pr)


@router.delete("/progress/{record_id}", response_model=MessageResponse)
async def delete_pr(
    record_id: UUID,
    current_user: CurrentUser,
    pr_service: PersonalRecordServiceDep,
):
    await pr_service.delete_record(record_id, current_user["user_id"])
    return MessageResponse(message="PR deleted successfully")
