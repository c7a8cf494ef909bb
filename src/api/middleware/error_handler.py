"""
Error handling middleware for API

FastAPI lets us define custom handlers for specific exception types.
When an exception is raised anywhere in the request, FastAPI catches it
and calls the appropriate handler to return a formatted error response.

Handlers defined here:
- Validation errors (bad request format) -> 422 ValidationErrorResponse
- Domain errors (DomainError subclasses) -> their own status code
- Unexpected errors -> 500
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from datetime import datetime, timezone
import uuid
from typing import Optional

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from utils.logger import get_logger
from models.enums import LogCategory, TransportAction

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


class ServiceNotReadyError(DomainError):
    """Services not initialized yet (app still starting)"""
    def __init__(self):
        super().__init__(
            code="SERVICE_NOT_READY",
            message="Service container not initialized. Timer preview may still be starting.",
            status_code=503
        )


class UnknownTransportActionError(DomainError):
    """Transport action name is not start/pause/stop/reset"""
    def __init__(self, action: str):
        super().__init__(
            code="UNKNOWN_TRANSPORT_ACTION",
            message=f"Transport action '{action}' is not supported",
            details={
                "action": action,
                "valid_actions": [a.value for a in TransportAction]
            },
            status_code=404
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure, bad colors)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error: {len(errors)} errors", request_id=request_id, path=request.url.path)

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

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

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(mode="json")
        )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Handle domain-specific errors"""
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

        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(mode="json")
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            request_id=request_id,
            path=request.url.path
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

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode="json")
        )
