"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, pagination, envelopes
- user: Registration, login, profile, author summaries
- workout / meal / progress: Activity records
- weight / personal_record: Weight log and PR tracking
- post: Posts, likes, comments, replies

Usage:
======
    from fitshare.shared.schemas.post import PostCreate, PostResponse
    from fitshare.shared.schemas.common import ApiResponse, Page
"""

from fitshare.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    Page,
    ApiResponse,
    MessageResponse,
    HealthResponse,
    PhotosMixin,
    RemovedPhotosMixin,
)
from fitshare.shared.schemas.user import (
    UserCreate,
    UserLogin,
    ProfileUpdate,
    GoalWeightUpdate,
    UserResponse,
    PublicUserResponse,
    AuthorSummary,
    AuthResponse,
)
from fitshare.shared.schemas.workout import (
    Exercise,
    WorkoutCreate,
    WorkoutUpdate,
    WorkoutFilters,
    WorkoutResponse,
)
from fitshare.shared.schemas.meal import (
    Nutrition,
    MealCreate,
    MealUpdate,
    MealFilters,
    MealResponse,
)
from fitshare.shared.schemas.progress import (
    Measurement,
    ProgressCreate,
    ProgressUpdate,
    ProgressFilters,
    ProgressResponse,
    parse_progress_payload,
)
from fitshare.shared.schemas.weight import (
    WeightEntryCreate,
    WeightEntryUpdate,
    WeightEntryFilters,
    WeightEntryResponse,
)
from fitshare.shared.schemas.personal_record import (
    PRExerciseCreate,
    PRExerciseUpdate,
    PRExerciseResponse,
    PRRecordCreate,
    PRRecordResponse,
    PRHistory,
)
from fitshare.shared.schemas.post import (
    PostCreate,
    PostUpdate,
    CommentCreate,
    PostFilters,
    ReplyResponse,
    CommentResponse,
    LikeResult,
    PostResponse,
    PostFeed,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "Page",
    "ApiResponse",
    "MessageResponse",
    "HealthResponse",
    "PhotosMixin",
    "RemovedPhotosMixin",
    # User
    "UserCreate",
    "UserLogin",
    "ProfileUpdate",
    "GoalWeightUpdate",
    "UserResponse",
    "PublicUserResponse",
    "AuthorSummary",
    "AuthResponse",
    # Workout
    "Exercise",
    "WorkoutCreate",
    "WorkoutUpdate",
    "WorkoutFilters",
    "WorkoutResponse",
    # Meal
    "Nutrition",
    "MealCreate",
    "MealUpdate",
    "MealFilters",
    "MealResponse",
    # Progress
    "Measurement",
    "ProgressCreate",
    "ProgressUpdate",
    "ProgressFilters",
    "ProgressResponse",
    "parse_progress_payload",
    # Weight log
    "WeightEntryCreate",
    "WeightEntryUpdate",
    "WeightEntryFilters",
    "WeightEntryResponse",
    # Personal records
    "PRExerciseCreate",
    "PRExerciseUpdate",
    "PRExerciseResponse",
    "PRRecordCreate",
    "PRRecordResponse",
    "PRHistory",
    # Post
    "PostCreate",
    "PostUpdate",
    "CommentCreate",
    "PostFilters",
    "ReplyResponse",
    "CommentResponse",
    "LikeResult",
    "PostResponse",
    "PostFeed",
]
