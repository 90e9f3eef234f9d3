from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
from app.core.constants import ErrorCode
from app.schemas.response import ErrorResponse, ErrorDetail
from app.utils.dates import utc_now
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: ErrorCode.VALIDATION_ERROR,
        401: ErrorCode.UNAUTHORIZED,
        403: ErrorCode.FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
        405: ErrorCode.METHOD_NOT_ALLOWED,
        409: ErrorCode.CONFLICT,
        422: ErrorCode.VALIDATION_ERROR,
        500: ErrorCode.INTERNAL_ERROR,
    }
    code = code_map.get(status_code)
    return code.value if code else f"HTTP_{status_code}"

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    request_id = _request_id(request)
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        timestamp=utc_now().isoformat(),
        path=request.url.path,
        request_id=request_id
    )
    response_headers = {"X-Request-ID": request_id}
    if headers:
        response_headers.update(headers)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response.model_dump(by_alias=True)),
        headers=response_headers,
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    logger.warning(f"[{_request_id(request)}] Validation error: {errors}")
    return _error_response(
        request,
        400,
        ErrorCode.VALIDATION_ERROR.value,
        "Request validation failed",
        details={"validationErrors": errors},
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = getattr(exc, "code", None) or _get_error_code(exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(log_level, f"[{_request_id(request)}] HTTP {exc.status_code} {code}: {message}")
    return _error_response(
        request,
        exc.status_code,
        code,
        message,
        details=getattr(exc, "details", None),
        headers=getattr(exc, "headers", None),
    )

async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"[{_request_id(request)}] Integrity error: {exc.orig}")
    return _error_response(request, 409, ErrorCode.DUPLICATE_ERROR.value, "Duplicate data exists")

async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[{_request_id(request)}] Unhandled exception: {exc}", exc_info=True)
    return _error_response(
        request,
        500,
        ErrorCode.INTERNAL_ERROR.value,
        "An unexpected error occurred",
        details={"errorType": type(exc).__name__},
    )
