"""
Enums used across the application.
"""

from enum import Enum


class WorkoutSplit(str, Enum):
    """Body-part split a workout targets."""

    PUSH = "Push"
    PULL = "Pull"
    LEGS = "Legs"
    UPPER_BODY = "Upper Body"
    LOWER_BODY = "Lower Body"
    FULL_BODY = "Full Body"
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core"
    CARDIO = "Cardio"
    OTHER = "Other"


class MealType(str, Enum):
    """Time-of-day slot for a logged meal."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ProgressType(str, Enum):
    """
    Discriminator for progress entries.

    Each value selects which payload fields are required:
    weight → weight, pr → exercise + pr_value, measurement → measurement,
    photo → at least one photo.
    """

    WEIGHT = "weight"
    PR = "pr"
    MEASUREMENT = "measurement"
    PHOTO = "photo"


class PostType(str, Enum):
    """Kind of activity a post shares."""

    WORKOUT = "workout"
    MEAL = "meal"
    PROGRESS = "progress"


class PRUnit(str, Enum):
    """
    Unit a personal-record exercise is measured in.

    reps and time values are whole numbers; lbs may be fractional.
    """

    LBS = "lbs"
    REPS = "reps"
    TIME = "time"
