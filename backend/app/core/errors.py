# app/core/errors.py
"""
Error taxonomy shared by services and routers, plus the FastAPI handlers
that turn it into JSON error responses.

Every error body has the shape:
    {"success": false, "error": {"code": "...", "message": "..."}}
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("uvicorn.error")


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and a stable code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class AuthRequiredError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "You are not allowed to do that"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class UpstreamAuthError(AppError):
    """The identity provider refused or failed a request. Safe to retry."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "AUTH_FAILED"
    default_message = "Authentication with the identity provider failed"


class UnexpectedError(AppError):
    pass


def error_body(code: str, message: str) -> dict:
    return {"success": False, "error": {"code": code, "message": message}}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are user-correctable input errors, same as failed length checks
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", ValidationError.default_message)
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=error_body(ValidationError.code, message),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[error] unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=UnexpectedError.status_code,
        content=error_body(UnexpectedError.code, UnexpectedError.default_message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
