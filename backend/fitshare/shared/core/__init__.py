"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from fitshare.shared.core.logging import logger, get_logger
    from fitshare.shared.core.exceptions import FitShareException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from fitshare.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from fitshare.shared.core.exceptions import (
    FitShareException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    PostNotFoundError,
    CommentNotFoundError,
    ResourceNotFoundError,
    NotFoundOrUnauthorizedError,
    StoredObjectNotFoundError,
    ValidationError,
    InvalidFileTypeError,
    FileTooLargeError,
    TooManyFilesError,
    ConflictError,
    DuplicateResourceError,
    StorageError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "FitShareException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "PostNotFoundError",
    "CommentNotFoundError",
    "ResourceNotFoundError",
    "NotFoundOrUnauthorizedError",
    "StoredObjectNotFoundError",
    "ValidationError",
    "InvalidFileTypeError",
    "FileTooLargeError",
    "TooManyFilesError",
    "ConflictError",
    "DuplicateResourceError",
    "StorageError",
]
