# ============================================================================
# FILE: justvibe/core/errors.py
# ============================================================================
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from justvibe.config import settings
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or malformed input"""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Missing, invalid or expired token"""
    status_code = status.HTTP_403_FORBIDDEN


class ForbiddenError(AppError):
    """Authenticated, but not the owner of the resource"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Duplicate favorite, playlist name or username"""
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(AppError):
    """Relational store or identity provider failure"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(message: str, detail: str = None) -> dict:
    body = {"error": message}
    if detail and settings.is_development:
        body["message"] = detail
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        # Store details never leave the process outside development
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, str(exc.__cause__) if exc.__cause__ else None),
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Something went wrong!", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto JSON responses"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
