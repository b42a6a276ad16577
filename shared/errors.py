"""
Shared error handling for the decoupling patterns.

The engines themselves never raise these: unit failures pass through
unchanged. They are raised by the bundled units and facades.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PatternsException(Exception):
    """Base exception for bundled units and facades.

    The request ID is captured when the error is raised.
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        self.request_id = request_id_var.get()
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=self.request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(PatternsException):
    """Invalid unit construction."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class AuthorizationError(PatternsException):
    """Authorization-related errors."""

    def __init__(self, message: str = "Authorization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHORIZATION_ERROR", message, details)


class SourceError(PatternsException):
    """A data source could not produce its value."""

    def __init__(self, source: str, message: str = "Source unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("SOURCE_ERROR", f"{source}: {message}", details)
