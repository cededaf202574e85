"""
FitShare SQLAlchemy Models

This package contains all database models for the FitShare application.

Model Hierarchy:
================
    User
       ├── workouts (Workout[])
       ├── meals (Meal[])
       ├── progress_entries (Progress[])
       ├── weight_entries (WeightEntry[])
       ├── pr_exercises (PRExercise[])
       │      └── records (PRRecord[])
       └── posts (Post[])
              ├── likes (PostLike[])
              └── comments (Comment[])
                     └── replies (Reply[])

    Post.workout / Post.meal / Post.progress → optional reference to one record

Usage:
======
    from fitshare.shared.models import User, Workout, Post

    post = await post_repo.get_with_relations(post_id)
    post.comments[0].replies  # insertion ordered
"""

from fitshare.shared.models.base import Base, TimestampMixin, JSONType
from fitshare.shared.models.enums import (
    WorkoutSplit,
    MealType,
    ProgressType,
    PostType,
    PRUnit,
)
from fitshare.shared.models.user import User
from fitshare.shared.models.workout import Workout
from fitshare.shared.models.meal import Meal
from fitshare.shared.models.progress import Progress
from fitshare.shared.models.weight_entry import WeightEntry
from fitshare.shared.models.personal_record import PRExercise, PRRecord
from fitshare.shared.models.post import Post, PostLike, Comment, Reply

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "JSONType",
    # Enums
    "WorkoutSplit",
    "MealType",
    "ProgressType",
    "PostType",
    "PRUnit",
    # Models
    "User",
    "Workout",
    "Meal",
    "Progress",
    "WeightEntry",
    "PRExercise",
    "PRRecord",
    "Post",
    "PostLike",
    "Comment",
    "Reply",
]
