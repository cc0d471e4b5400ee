"""
Personal Logger — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for each failure of the entry lifecycle.
How:   Each exception carries a message and an optional context dict.
       The storage engine raises them; global handlers registered in main.py
       turn them into structured JSON error responses.
Who:   Raised by the storage engine and validation boundary; caught by
       handlers or by any caller using the engine directly.

Exception Hierarchy:
    PersonalLoggerError (base)
    ├── ValidationError       → 400 Bad Request (rejected before any storage call)
    ├── InitializationError   → 503 Service Unavailable (store cannot be opened)
    ├── WriteError            → 500 Internal Server Error (append transaction failed)
    └── ReadError             → 500 Internal Server Error (recency query failed)

None of these are retried automatically; every failure is terminal for that attempt.
"""

from typing import Any, Dict, Optional


class PersonalLoggerError(Exception):
    """
    Base exception for all Personal Logger errors.

    Attributes:
        message:  User-facing error description (safe to return in an API response)
        context:  Additional info. Returned as `details` for ValidationError
                  (field, allowed values); logged server-side only for
                  storage errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PersonalLoggerError):
    """
    Raised when an entry fails validation at the boundary.

    When:    Empty or whitespace-only content, or a type outside issue/task/note.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Please enter some text",
            "details": {"field": "content"}
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


class InitializationError(PersonalLoggerError):
    """
    Raised when the embedded store cannot be opened or migrated.

    When:    Permission denied, unwritable directory, corrupted database file,
             a stored schema version this release does not know, or an
             operation attempted before initialize() succeeded.
    HTTP:    503 Service Unavailable

    Saving stays disabled for the session; a restart retries the open.
    """

    def __init__(
        self,
        message: str = "Local storage could not be opened",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class WriteError(PersonalLoggerError):
    """
    Raised when the append transaction aborts.

    When:    Store closed, disk full, constraint violation.
    HTTP:    500 Internal Server Error

    Nothing is written: the transaction is rolled back as a whole.
    """

    def __init__(
        self,
        message: str = "Failed to save entry",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ReadError(PersonalLoggerError):
    """
    Raised when the recency query fails.

    HTTP:    500 Internal Server Error
    Clients keep showing the previously loaded list.
    """

    def __init__(
        self,
        message: str = "Failed to load entries",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
