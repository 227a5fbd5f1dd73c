"""
Error handling for the API

Exceptions raised anywhere in a request are converted by the handlers
registered here into the ErrorResponse envelope:
- Validation errors (bad query values) -> 422
- Domain errors (unknown overlay kind, ...) -> their own status code
- Anything unexpected -> 500
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class OverlayKindNotFoundError(DomainError):
    """Overlay kind identifier doesn't exist"""
    def __init__(self, kind: str, valid_kinds: Sequence[str] = ()):
        super().__init__(
            code="OVERLAY_KIND_NOT_FOUND",
            message=f"Overlay kind '{kind}' not found",
            details={"kind": kind, "valid_kinds": list(valid_kinds)},
            status_code=404
        )


class SessionNotFoundError(DomainError):
    """Live session id doesn't exist"""
    def __init__(self, session_id: str):
        super().__init__(
            code="SESSION_NOT_FOUND",
            message=f"Session '{session_id}' not found",
            details={"session_id": session_id},
            status_code=404
        )


def _json(response) -> dict:
    return json.loads(response.model_dump_json())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error: {len(errors)} errors", request_id=request_id, path=request.url.path)

        validation_errors = [
            {
                # Skip the location root ("query", "body", ...)
                "field": ".".join(str(x) for x in error["loc"][1:]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in errors
        ]

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
                timestamp=_now()
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_json(response))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        request_id = str(uuid.uuid4())

        log.warn(f"Domain error: {exc.code} - {exc.message}", request_id=request_id)

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                timestamp=_now()
            ),
            request_id=request_id
        )
        return JSONResponse(status_code=exc.status_code, content=_json(response))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            request_id=request_id,
            exc_info=True,
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
                timestamp=_now()
            ),
            request_id=request_id
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_json(response))
