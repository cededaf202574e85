"""
File Handler

Serves stored photos: GET /files/{key}. Public, so image tags can load it
without a token. Keys containing path separators or ".." are rejected.
"""

from fastapi import APIRouter
from fastapi.responses import Response

from fitshare.api.dependencies.services import MediaServiceDep


router = APIRouter()


@router.get("/{key}")
async def get_file(key: str, media_service: MediaServiceDep):
    """
    Raises:
        400: Unsafe key
        404: No such file
    """
    stored = await media_service.fetch(key)
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )
