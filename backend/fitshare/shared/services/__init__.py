"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Cache / Object storage

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, login, token issue
- UserService: Profiles and the user directory
- WorkoutService / MealService / ProgressService / WeightLogService: Owner-scoped activity records
- PersonalRecordService: PR exercise catalog and history
- PostService: Feed, likes, comments, replies
- MediaService: Photo validation, storage and release

Usage:
======
    from fitshare.shared.services import PostService

    service = PostService(db, cache)
    feed = await service.list(PostFilters(), page=1, limit=20)
"""

from fitshare.shared.services.auth_service import AuthService
from fitshare.shared.services.media_service import MediaService, UploadedFile
from fitshare.shared.services.ownership import Owned, assert_owner, is_owner
from fitshare.shared.services.personal_record_service import PersonalRecordService
from fitshare.shared.services.post_service import PostService
from fitshare.shared.services.resource_service import (
    MealService,
    OwnedResourceService,
    ProgressService,
    WeightLogService,
    WorkoutService,
)
from fitshare.shared.services.user_service import UserService

__all__ = [
    "AuthService",
    "MediaService",
    "UploadedFile",
    "Owned",
    "assert_owner",
    "is_owner",
    "PostService",
    "OwnedResourceService",
    "WorkoutService",
    "MealService",
    "ProgressService",
    "WeightLogService",
    "PersonalRecordService",
    "UserService",
]
