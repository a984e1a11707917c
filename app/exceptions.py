# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class SellahException(Exception):
    """
    Base exception for the Sellah API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SELLAH_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Session Exceptions
# =============================================================================

class LogoutFailedError(SellahException):
    """Raised when the logout flag could not be recorded."""

    def __init__(self, reason: str, error: str):
        super().__init__(
            message=f"Logout could not be recorded: {error}",
            code="LOGOUT_FAILED",
            status_code=500,
            suggestion="Retry the logout; the session has not been ended",
            details={"reason": reason}
        )


# =============================================================================
# Order Exceptions
# =============================================================================

class InvalidDisplayStatusError(SellahException):
    """Raised when a tab filter names a bucket that does not exist."""

    def __init__(self, value: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown display status: {value}",
            code="INVALID_DISPLAY_STATUS",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"display_status": value, "allowed": allowed}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def sellah_exception_handler(
    request: Request,
    exc: SellahException
) -> JSONResponse:
    """
    Convert SellahException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
