"""
Shared error handling for the parameter cache.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class ParameterCacheException(Exception):
    """Base exception for the parameter cache."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class FetchFailure(ParameterCacheException):
    """The parameter store could not return a value for a key."""

    def __init__(self, key: str, cause: BaseException, details: Optional[Dict[str, Any]] = None):
        self.key = key
        self.cause = cause
        super().__init__(
            "FETCH_FAILURE",
            f"failed to retrieve key {key} from parameter store: {cause}",
            {"key": key, "error_type": type(cause).__name__, **(details or {})}
        )
