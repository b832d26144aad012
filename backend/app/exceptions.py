"""
MemoPad Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the memo facade and summary proxy.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    MemoPadError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── ConfigurationError       → 500 Internal Server Error
    ├── StorageError             → 500 Internal Server Error
    ├── LLMServiceError          → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests

The `message` is the only part ever returned to the client. `context`
is logged server-side.
"""

from typing import Any, Dict, Optional


class MemoPadError(Exception):
    """
    Base exception for all MemoPad application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MemoPadError):
    """
    Raised when client input fails a business rule.

    When:    Summary requested without memo content.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types) are still reported by
    FastAPI itself with 422.
    """

    code = "validation_error"
    status_code = 400

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


class NotFoundError(MemoPadError):
    """
    Raised when a requested resource does not exist.

    The repository itself reports a missing memo on lookup as ``None``;
    routes convert that into this exception. Updating a missing memo
    raises it directly.
    HTTP:    404 Not Found
    """

    code = "not_found"
    status_code = 404

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


class ConfigurationError(MemoPadError):
    """
    Raised when a required setting is missing at call time.

    When:    GEMINI_API_KEY is unset and a summary is requested.
    HTTP:    500 Internal Server Error
    """

    code = "configuration_error"

    def __init__(
        self,
        message: str = "The server is not configured for this operation.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(MemoPadError):
    """
    Raised when a memo database operation fails.

    The message is always the generic, operation-level text chosen by
    the repository ("Failed to load memos." etc). The driver error type
    and detail go into `context` and the server log only.
    HTTP:    500 Internal Server Error
    """

    code = "storage_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LLMServiceError(MemoPadError):
    """
    Raised when the summary provider fails or returns nothing usable.

    When:    Gemini returned no text, or the call raised.
    HTTP:    500 Internal Server Error
    """

    code = "llm_service_error"

    def __init__(
        self,
        message: str = "An error occurred while generating the summary.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(MemoPadError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    code = "rate_limit_exceeded"
    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
