"""HTTP exceptions carrying a machine-readable error code for the response envelope."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from app.core.constants import ErrorCode


class AppException(HTTPException):
    """HTTPException with an error code and optional details."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.details = details


class ValidationError(AppException):
    def __init__(self, detail: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, ErrorCode.VALIDATION_ERROR.value, details)


class AuthenticationError(AppException):
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail, ErrorCode.AUTHENTICATION_ERROR.value)
        self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail, ErrorCode.NOT_FOUND.value)


class DuplicateError(AppException):
    def __init__(self, detail: str = "Duplicate data exists", code: ErrorCode = ErrorCode.DUPLICATE_ERROR):
        super().__init__(status.HTTP_409_CONFLICT, detail, code.value)
