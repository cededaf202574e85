"""
API Handlers

Route handlers for the FitShare API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from fitshare.api.handlers import (
    auth_handler,
    file_handler,
    health_handler,
    meal_handler,
    post_handler,
    personal_record_handler,
    progress_handler,
    user_handler,
    weight_handler,
    workout_handler,
)

__all__ = [
    "auth_handler",
    "file_handler",
    "health_handler",
    "meal_handler",
    "post_handler",
    "personal_record_handler",
    "progress_handler",
    "user_handler",
    "weight_handler",
    "workout_handler",
]
