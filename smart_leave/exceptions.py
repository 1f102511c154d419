"""
Centralized exception hierarchy for Smart Leave.

Provides specific exception types for form validation and backend
failures, so views can show a user-friendly alert for any of them.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception
# =============================================================================


class SmartLeaveError(RuntimeError):
    """
    Base exception for all Smart Leave errors.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details (optional).
        error_code: Machine-readable error code.
        request_id: Unique identifier for the failed operation.
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.error_code = error_code or self._default_error_code()
        self.request_id = request_id or str(uuid.uuid4())

    def _default_error_code(self) -> str:
        return f"smart_leave_{self.__class__.__name__.lower()}"

    @property
    def user_message(self) -> str:
        """Text shown to the user in an error alert."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.detail:
            result["detail"] = self.detail
        if self.request_id:
            result["request_id"] = self.request_id
        return result

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def log(self, level: int = logging.ERROR) -> None:
        """Log the exception with structured data."""
        logger.log(
            level,
            self.message,
            extra={
                "error_code": self.error_code,
                "detail": self.detail,
                "request_id": self.request_id,
                "exception_type": self.__class__.__name__,
            },
        )


# =============================================================================
# Form Validation Errors
# =============================================================================


class ValidationError(SmartLeaveError):
    """Raised when form input fails validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        detail: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.field = field
        full_message = f"{field}: {message}" if field else message
        super().__init__(
            full_message,
            detail=detail,
            error_code="validation_error",
            request_id=request_id,
        )


class MissingRequiredFieldError(ValidationError):
    """Raised when a required form field is empty."""

    def __init__(self, field_name: str, *, request_id: str | None = None) -> None:
        super().__init__(
            message="Missing required field",
            field=field_name,
            detail=f"Field '{field_name}' is required",
            request_id=request_id,
        )


class InvalidDateRangeError(ValidationError):
    """Raised when the backend refuses a leave date range."""

    def __init__(self, reason: str, *, request_id: str | None = None) -> None:
        super().__init__(
            message=reason or "Failed to calculate duration. Please check your dates.",
            field=None,
            request_id=request_id,
        )
        self.reason = reason


class InsufficientBalanceError(ValidationError):
    """Raised when a requested duration exceeds the remaining balance."""

    def __init__(
        self,
        leave_type: str,
        *,
        requested: float,
        available: float,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            message="Insufficient leave balance",
            field="leaveType",
            detail=f"{leave_type}: requested {requested:g} day(s), available {available:g}",
            request_id=request_id,
        )
        self.leave_type = leave_type
        self.requested = requested
        self.available = available


# =============================================================================
# Not Found Errors
# =============================================================================


class NotFoundError(SmartLeaveError):
    """Raised when a requested resource is missing from a response."""

    def __init__(
        self,
        message: str,
        *,
        resource_type: str | None = None,
        resource_id: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        detail = None
        if resource_type and resource_id:
            detail = f"{resource_type} with ID {resource_id!r} not found"
        super().__init__(
            message,
            detail=detail,
            error_code="not_found",
            request_id=request_id,
        )


# =============================================================================
# Backend API Errors
# =============================================================================


class ApiError(SmartLeaveError):
    """
    Raised when the leave-management backend answers with an error.

    The backend usually replies with a plain-text reason; it is kept in
    ``body`` and preferred over the generic message when shown to users.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        endpoint: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        detail_parts = []
        if endpoint:
            detail_parts.append(f"Endpoint: {endpoint}")
        if status_code:
            detail_parts.append(f"Status: {status_code}")
        detail = "; ".join(detail_parts) if detail_parts else None
        super().__init__(
            message,
            detail=detail,
            error_code="api_error",
            request_id=request_id,
        )

    @property
    def user_message(self) -> str:
        if isinstance(self.body, str) and self.body.strip():
            return self.body.strip()
        if isinstance(self.body, dict):
            for key in ("message", "error", "detail"):
                value = self.body.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        return self.message

    @property
    def title(self) -> str:
        """Alert title, e.g. ``Error 409``."""
        return f"Error {self.status_code or ''}".strip()


class SessionExpiredError(ApiError):
    """Raised when an authenticated call is answered with 401."""

    def __init__(self, *, endpoint: str | None = None, request_id: str | None = None) -> None:
        super().__init__(
            "Your session has expired. Please log in again.",
            status_code=401,
            endpoint=endpoint,
            request_id=request_id,
        )
        self.error_code = "session_expired"

    @property
    def user_message(self) -> str:
        return self.message


class APITimeoutError(ApiError):
    """Raised when the backend does not answer in time."""

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout_seconds: float | None = None,
        request_id: str | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            "Request to the leave service timed out",
            endpoint=endpoint,
            request_id=request_id,
        )
        self.error_code = "api_timeout"
        if timeout_seconds:
            self.detail = f"Timeout after {timeout_seconds:g}s"


class APIConnectionError(ApiError):
    """Raised when the backend cannot be reached."""

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        reason: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            "Could not reach the leave service",
            endpoint=endpoint,
            request_id=request_id,
        )
        self.error_code = "api_connection_error"
        if reason:
            self.detail = reason


class ResponseFormatError(ApiError):
    """Raised when a successful reply does not have the expected shape."""

    def __init__(
        self,
        model_name: str,
        *,
        body: Any = None,
        reason: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            f"Unexpected reply from the leave service ({model_name})",
            body=body,
            request_id=request_id,
        )
        self.error_code = "response_format_error"
        self.model_name = model_name
        if reason:
            self.detail = reason


def get_user_message(exc: BaseException, fallback: str) -> str:
    """Return alert text for ``exc``, or ``fallback`` for a bare ApiError."""
    if isinstance(exc, ApiError) and type(exc) is ApiError:
        message = exc.user_message
        return message if message != exc.message else fallback
    if isinstance(exc, SmartLeaveError):
        return exc.user_message
    return fallback
