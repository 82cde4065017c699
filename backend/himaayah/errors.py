"""
Application errors. Each maps to one HTTP status and renders as {"error": message}.
Handlers are registered on the FastAPI app in himaayah.main.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing fields"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Auth required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class StoreError(AppError):
    message = "Database error"


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _first_validation_message(exc: RequestValidationError) -> str:
    """Short message from the first pydantic error, e.g. 'email: value is not a valid email address'."""
    errors = exc.errors()
    if not errors:
        return ValidationError.message
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    msg = first.get("msg", "Invalid input")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_error_handlers(app: FastAPI) -> None:
    """Render every error as {"error": message}; never leak tracebacks or SQL."""

    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, _first_validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(StoreError.status_code, StoreError.message)

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(AppError.status_code, AppError.message)
