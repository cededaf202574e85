"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    FitShareException (base)
       │
       ├── AuthenticationError (401)       ← Missing, invalid, expired or pre-restart token
       ├── AuthorizationError (403)        ← Authenticated but not the owner
       ├── NotFoundError (404)             ← ID does not resolve
       │      ├── UserNotFoundError
       │      ├── PostNotFoundError
       │      ├── CommentNotFoundError
       │      ├── ResourceNotFoundError    ← Workout / Meal / Progress
       │      └── NotFoundOrUnauthorizedError ← Masked cross-reference on post create
       ├── ValidationError (400)           ← Field constraint violations
       │      ├── InvalidFileTypeError
       │      ├── FileTooLargeError
       │      └── TooManyFilesError
       ├── ConflictError (409)             ← Unique field collision
       │      └── DuplicateResourceError
       └── StorageError (502)              ← Object storage failure

Usage:
======
    from fitshare.shared.core.exceptions import NotFoundError, ValidationError

    raise PostNotFoundError()
    # {"success": false, "message": "Post not found", "code": "NOT_FOUND"}

    raise ValidationError(errors=["content: must not be empty"])
    # {"success": false, "message": "Validation failed", "code": "VALIDATION_ERROR",
    #  "errors": ["content: must not be empty"]}

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and rendered with
    `to_dict()` using the exception's status code.
"""

from typing import Any, Optional


class FitShareException(Exception):
    """
    Base exception for all FitShare application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context (logged, not rendered)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the JSON error envelope.

        Returns:
            Dictionary with success flag, message and error code
        """
        return {
            "success": False,
            "message": self.message,
            "code": self.error_code,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(FitShareException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Authorization header missing or not a bearer token
    - Token signature invalid or token expired
    - Token issued before the current process started
    - Login credentials do not match
    """

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_REQUIRED",
            details=details,
        )


class AuthorizationError(FitShareException):
    """
    Authorization failed error (403 Forbidden).

    Raised when the acting user is not the owner of the record being mutated.
    """

    def __init__(
        self,
        message: str = "Not authorized to perform this action",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="FORBIDDEN",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(FitShareException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Workout")
        # Message: "Workout not found"
    """

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.resource = resource
        super().__init__(
            message=message or f"{resource} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        super().__init__(resource="User", details={"user_id": user_id} if user_id else None)


class PostNotFoundError(NotFoundError):
    """Post not found error."""

    def __init__(self, post_id: Optional[str] = None) -> None:
        super().__init__(resource="Post", details={"post_id": post_id} if post_id else None)


class CommentNotFoundError(NotFoundError):
    """Comment not found error."""

    def __init__(self, comment_id: Optional[str] = None) -> None:
        super().__init__(
            resource="Comment", details={"comment_id": comment_id} if comment_id else None
        )


class ResourceNotFoundError(NotFoundError):
    """Workout, meal or progress entry not found."""


class NotFoundOrUnauthorizedError(NotFoundError):
    """
    Referenced record is missing or owned by someone else.

    Rendered as 404 so that non-owners cannot discover the existence of
    another user's records.

    Example:
        raise NotFoundOrUnauthorizedError("Workout")
        # Message: "Workout not found or unauthorized"
    """

    def __init__(self, resource: str) -> None:
        super().__init__(resource=resource, message=f"{resource} not found or unauthorized")


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(FitShareException):
    """
    Validation error (400 Bad Request).

    Carries a list of "field: message" strings rendered as `errors`.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidFileTypeError(ValidationError):
    """Uploaded file's MIME type is not an allowed image type."""

    def __init__(self, content_type: Optional[str]) -> None:
        super().__init__(
            message="Invalid file type. Only JPEG, PNG and WebP images are allowed",
            errors=[f"photos: unsupported file type '{content_type}'"],
        )


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the size limit."""

    def __init__(self, filename: Optional[str], max_bytes: int) -> None:
        super().__init__(
            message=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB",
            errors=[f"photos: '{filename}' exceeds {max_bytes} bytes"],
        )


class TooManyFilesError(ValidationError):
    """More files than allowed in one request."""

    def __init__(self, max_files: int) -> None:
        super().__init__(
            message=f"Too many files. Maximum is {max_files}",
            errors=[f"photos: at most {max_files} files allowed"],
        )


class ConflictError(FitShareException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("User already exists with this email")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """Unique field collision on create (e.g. email)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# STORAGE ERRORS (502)
# ═══════════════════════════════════════════════════════════════════════════════


class StorageError(FitShareException):
    """
    Object storage operation failed (502 Bad Gateway).

    Raised by the storage adapter; media cleanup catches and logs it.
    """

    def __init__(
        self,
        message: str = "Object storage operation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=502,
            error_code="STORAGE_ERROR",
            details=details,
        )


class StoredObjectNotFoundError(NotFoundError):
    """Requested object key does not exist in storage."""

    def __init__(self, key: str) -> None:
        super().__init__(resource="File", details={"key": key})
