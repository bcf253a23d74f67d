"""
Postboard: Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for each failure class of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by route dependencies, handlers and the repository.

Exception Hierarchy:
    PostboardError (base)     → 500 Internal Server Error
    ├── ValidationError       → 400 Bad Request (malformed id, bad body)
    ├── NotFoundError         → 404 Not Found (empty body)
    └── RepositoryError       → 500 Internal Server Error (storage failure)
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only when configured)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when client input fails validation.

    When:    The `{post_id}` path segment is not a 24-character hex identifier.
    HTTP:    400 Bad Request

    Request body violations are reported by FastAPI's RequestValidationError,
    which main.py maps onto the same 400 response shape.

    Example response:
        {
            "error": "validation_error",
            "message": "'123' is not a valid post id",
            "details": {"field": "post_id", "value": "123"},
            "request_id": "1f0c9a2b"
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PostboardError):
    """
    Raised when a requested post does not exist.

    When:    GET or PATCH /api/posts/{post_id} with a well-formed id that is
             not stored. DELETE never raises it (removing a missing post
             still answers 204).
    HTTP:    404 Not Found, empty body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RepositoryError(PostboardError):
    """
    Raised when a storage operation fails.

    What:    Any error raised while the repository talks to the database:
             connection loss, constraint violation, driver errors.
    HTTP:    500 Internal Server Error

    The response message is always generic. The original error text is kept in
    `context["reason"]`, logged with the request ID, and echoed in the response
    only when EXPOSE_ERROR_DETAILS is enabled.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
