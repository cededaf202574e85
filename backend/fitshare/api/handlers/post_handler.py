"""
Post Handler

Social feed endpoints.

    POST   /posts                             → create (201)
    GET    /posts                             → feed (?userId=&type=&page=&limit=)
    GET    /posts/{post_id}
    PATCH  /posts/{post_id}                   → edit content (author only)
    DELETE /posts/{post_id}                   → delete (author only)
    POST   /posts/{post_id}/like              → toggle like
    POST   /posts/{post_id}/comment           → add comment (201)
    POST   /posts/comments/{comment_id}/replies → add reply (201)
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from fitshare.api.dependencies import CurrentUser, Pagination
from fitshare.api.dependencies.services import PostServiceDep
from fitshare.shared.models.enums import PostType
from fitshare.shared.schemas.common import ApiResponse, MessageResponse
from fitshare.shared.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResult,
    PostCreate,
    PostFeed,
    PostFilters,
    PostResponse,
    PostUpdate,
    ReplyResponse,
)


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    payload: PostCreate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    """
    Share a post, optionally referencing one of the caller's records.

    Raises:
        400: Reference does not match the post type
        404: Referenced record missing or owned by someone else
    """
    post = await post_service.create(current_user["user_id"], payload)
    return ApiResponse(message="Post created successfully", data=post)


@router.get("", response_model=ApiResponse[PostFeed])
async def list_posts(
    current_user: CurrentUser,
    pagination: Pagination,
    post_service: PostServiceDep,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    post_type: Optional[PostType] = Query(None, alias="type"),
):
    """Feed, newest first."""
    filters = PostFilters(user_id=user_id, type=post_type)
    feed = await post_service.list(filters, pagination.page, pagination.limit)
    return ApiResponse(data=feed)


@router.get("/{post_id}", response_model=ApiResponse[PostResponse])
async def get_post(
    post_id: UUID,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    return ApiResponse(data=await post_service.get(post_id))


@router.patch("/{post_id}", response_model=ApiResponse[PostResponse])
async def edit_post(
    post_id: UUID,
    payload: PostUpdate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    post = await post_service.edit(post_id, current_user["user_id"], payload.content)
    return ApiResponse(message="Post updated successfully", data=post)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    await post_service.delete(post_id, current_user["user_id"])
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/like", response_model=ApiResponse[LikeResult])
async def toggle_like(
    post_id: UUID,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    """Like the post, or unlike it if already liked."""
    result = await post_service.toggle_like(post_id, current_user["user_id"])
    return ApiResponse(
        message="Post liked" if result.liked else "Post unliked",
        data=result,
    )


@router.post(
    "/{post_id}/comment",
    response_model=ApiResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    payload: CommentCreate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    comment = await post_service.add_comment(post_id, current_user["user_id"], payload.text)
    return ApiResponse(message="Comment added successfully", data=comment)


@router.post(
    "/comments/{comment_id}/replies",
    response_model=ApiResponse[ReplyResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    comment_id: UUID,
    payload: CommentCreate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    reply = await post_service.add_reply(comment_id, current_user["user_id"], payload.text)
    return ApiResponse(message="Reply added successfully", data=reply)
