"""
Dental SaaS Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the CRUD error taxonomy.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by schemas, repositories and services; caught by global handlers.
When:  Every error is terminal for the current request. Nothing is retried.

Exception Hierarchy:
    DentalSaaSError (base)
    ├── ValidationError   → 400 Bad Request (missing/invalid field)
    ├── NotFoundError     → 404 Not Found (missing key on read/update/delete)
    ├── ConflictError     → 409 Conflict (duplicate key on create)
    └── DatabaseError     → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class DentalSaaSError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only some handlers return it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DentalSaaSError):
    """
    Raised when a record fails validation.

    When:    A required field is blank, an amount is not positive, or an enum
             field holds an unknown value. Checked on create and again on the
             merged state of an update.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "cro is required",
            "details": {"field": "cro"}
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


class NotFoundError(DentalSaaSError):
    """
    Raised when a requested item does not exist.

    When:    GET/PUT/DELETE on an unknown ID, or an exact unique lookup
             (dentist by CRO, invoice by number) with no match.
    HTTP:    404 Not Found
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
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(DentalSaaSError):
    """
    Raised when a create targets an ID that already exists.

    The store's primary-key constraint is the only check; there is no
    read-before-write, so two concurrent creates for the same ID cannot
    both succeed.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} with this ID already exists"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' already exists"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(DentalSaaSError):
    """
    Raised when the store fails for any reason other than a precondition.

    What:    Connection lost, serialization failure, unexpected driver error.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The driver
        error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
