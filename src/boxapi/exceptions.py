"""Custom exception hierarchy for the Box client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from .models import Error


class BoxError(RuntimeError):
    """Base error for Box API failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthenticationError(BoxError):
    """Raised when tickets or tokens cannot be obtained."""


class RequestError(BoxError):
    """Raised when an HTTP request cannot be fulfilled."""


class ApiError(RequestError):
    """Raised when the API answers with a structured error envelope."""

    def __init__(
        self,
        message: str,
        *,
        error: Error | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.error = error


class UnexpectedResponseError(BoxError):
    """Raised when the API returns an unexpected payload structure."""
