"""
Multipart helpers for create/update endpoints with photos.

Resource writes arrive as multipart/form-data:

    payload = '{"title": "Leg day", "split": "Legs", ...}'   ← JSON text field
    photos  = <file>, <file>, ...                            ← up to MAX_UPLOAD_FILES

`load_payload` turns the text field into a dict for schema validation and
`read_uploads` reads the files, never more than one byte past the size
limit per file.
"""

import json
from typing import Any, Optional, Sequence

from fastapi import UploadFile

from fitshare.config.settings import settings
from fitshare.shared.core.exceptions import TooManyFilesError, ValidationError
from fitshare.shared.services.media_service import UploadedFile


def load_payload(raw: Optional[str]) -> dict[str, Any]:
    """
    Parse the JSON `payload` form field.

    Raises:
        ValidationError: Not JSON, or not a JSON object
    """
    try:
        data = json.loads(raw) if raw else {}
    except ValueError as e:
        raise ValidationError("Invalid request payload", errors=["payload: must be valid JSON"]) from e

    if not isinstance(data, dict):
        raise ValidationError("Invalid request payload", errors=["payload: must be a JSON object"])
    return data


async def read_upload(file: UploadFile) -> UploadedFile:
    """Read one file, capped at the size limit plus one byte."""
    data = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    return UploadedFile(filename=file.filename, content_type=file.content_type, data=data)


async def read_uploads(files: Optional[Sequence[UploadFile]]) -> list[UploadedFile]:
    """
    Read every uploaded file.

    Raises:
        TooManyFilesError: More files than MAX_UPLOAD_FILES
    """
    files = [f for f in (files or []) if f.filename]
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise TooManyFilesError(settings.MAX_UPLOAD_FILES)
    return [await read_upload(f) for f in files]
