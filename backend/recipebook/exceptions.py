"""
RecipeBook Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the gateway.
How:   Each exception carries a message, optional context, an HTTP status code
       and the JSON key the message is returned under. Global exception handlers
       (registered in main.py) turn them into JSON responses.
Who:   Raised by services, collaborator adapters and the auth dependency.

Exception Hierarchy:
    RecipeBookError (base)     → 500, "message"
    ├── ValidationError        → 400 Bad Request
    ├── AuthenticationError    → 401 Unauthorized, "error"
    ├── NotFoundError          → 404 Not Found
    ├── ConflictError          → 409 Conflict, "error"
    ├── IdentityProviderError  → 400 (uncategorized Firebase Auth failure)
    └── DocumentStoreError     → 500 (uncategorized Firestore failure)

Per-endpoint overrides:
    Existing clients depend on the exact status code and body key of every
    endpoint (e.g. check-session answers an unknown session with 401, and the
    favorites endpoints report validation problems under "error"). Any instance
    may therefore override `status_code` and `body_key`:

        raise NotFoundError("session", message="Invalid session", status_code=401)
"""

from typing import Any, Dict, Optional


class RecipeBookError(Exception):
    """
    Base exception for all RecipeBook application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged, NOT returned to client)
        details:     Optional extra string returned alongside the message
        status_code: HTTP status the global handler responds with
        body_key:    JSON key the message is returned under ("message" or "error")
    """

    status_code: int = 500
    body_key: str = "message"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        body_key: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.message = message
        self.context = context or {}
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        if body_key is not None:
            self.body_key = body_key
        super().__init__(self.message)

    def with_status(self, status_code: int, body_key: Optional[str] = None) -> "RecipeBookError":
        """Re-target this error at a different status (and key) and return it."""
        self.status_code = status_code
        if body_key is not None:
            self.body_key = body_key
        return self


def retarget(exc: Exception, status_code: int, body_key: str = "message") -> RecipeBookError:
    """
    Map any failure onto an endpoint's catch-all status.

    RecipeBook errors keep their message and are re-targeted in place; foreign
    exceptions are wrapped, keeping their text as the message.
    """
    if isinstance(exc, RecipeBookError):
        return exc.with_status(status_code, body_key)
    return RecipeBookError(
        message=str(exc) or "An unexpected error occurred",
        context={"original_error": type(exc).__name__},
        status_code=status_code,
        body_key=body_key,
    )


class ValidationError(RecipeBookError):
    """
    Raised when a required field is missing or empty.

    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Missing required fields",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        body_key: Optional[str] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(
            message=message, context=ctx, status_code=status_code, body_key=body_key
        )
        self.field = field


class AuthenticationError(RecipeBookError):
    """
    Raised when a bearer token is missing, malformed or rejected by the provider.

    HTTP:    401 Unauthorized
    Body:    {"error": "Invalid token", "details": "<provider reason>"}
    """

    status_code = 401
    body_key = "error"

    def __init__(
        self,
        message: str = "Missing or invalid token",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context, details=details)


class NotFoundError(RecipeBookError):
    """
    Raised when a requested user, account or session does not exist.

    HTTP:    404 Not Found (check-session re-targets this to 401)
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        body_key: Optional[str] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message, context=ctx, status_code=status_code, body_key=body_key
        )
        self.resource = resource


class ConflictError(RecipeBookError):
    """
    Raised when signup finds an account already registered with the email.

    HTTP:    409 Conflict
    """

    status_code = 409
    body_key = "error"

    def __init__(
        self,
        message: str = "User with email already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class IdentityProviderError(RecipeBookError):
    """
    Raised when Firebase Authentication fails for a reason we do not classify.

    HTTP:    400 Bad Request. The provider's own message is returned, since
             it usually describes a client problem (weak password, bad email).
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Identity provider request failed",
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message=message, context=context, status_code=status_code)


class DocumentStoreError(RecipeBookError):
    """
    Raised when a Firestore read or write fails unexpectedly.

    HTTP:    500 Internal Server Error
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message=message, context=context, status_code=status_code)
