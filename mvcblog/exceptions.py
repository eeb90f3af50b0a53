"""
MVC Blog - Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the failure modes of the blog.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       answer with the right HTTP status code: a JSON envelope for the API,
       a rendered error page for the HTML resource.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    BlogError (base)
    ├── ValidationError   → 400 Bad Request (client can fix the input)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

SQLAlchemy returns None for a missing row rather than raising. Services
convert that None into NotFoundError, so no operation ever proceeds with an
absent post or category.
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """
    Base exception for all blog application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged; only ValidationError exposes it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogError):
    """
    Raised when client input fails a business rule.

    When:    Empty title/content/name, a category id that is not an integer or
             does not exist, an unknown `_method` override.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Category with ID '42' does not exist",
            "details": {"field": "category_id", "category_id": 42}
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


class NotFoundError(BlogError):
    """
    Raised when a requested resource does not exist.

    When:    show / edit-form / update / delete on a post id with no row,
             or a category lookup that misses.
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


class DatabaseError(BlogError):
    """
    Raised when a database operation fails unexpectedly.

    What:    A query, insert, update or delete raised inside SQLAlchemy.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Constraint names,
    SQL text and driver errors stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
