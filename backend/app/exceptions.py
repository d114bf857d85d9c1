"""
Noteful Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Targeted error handling with the right HTTP status and a client-safe
       message, without try/except blocks in every route.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       {"error": {"message": ...}} responses.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError  → 400 Bad Request (client can fix)
    ├── NotFoundError    → 404 Not Found
    └── StorageError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Missing required field, empty name, no updatable field supplied,
             unknown folder reference, malformed body.
    HTTP:    400 Bad Request

    The message is returned verbatim, e.g. "Missing 'name' in request body".
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


class NotFoundError(NotefulError):
    """
    Raised when a requested resource does not exist.

    When:    Any verb on /folders/{id} or /notes/{id} with an unknown id.
    HTTP:    404 Not Found

    The data access layer returns None for missing rows; routes convert
    that None into this exception.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} doesn't exist"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageError(NotefulError):
    """
    Raised when a database statement fails unexpectedly.

    When:    Connection lost, constraint violation, malformed SQL.
    HTTP:    500 Internal Server Error

    The client only ever sees a generic message; the original error type
    and statement context are logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
