"""Domain errors and the FastAPI handlers that render them as ``{"error": message}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidSubmissionError(DomainError):
    """Raised when a request is well-formed JSON but breaks a business rule."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InviteGroupNotFoundError(DomainError):
    def __init__(self, message: str = "Invite group not found."):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InviteGroupLockedError(DomainError):
    """Raised when a group is locked, including when a concurrent submission locked it first."""

    def __init__(self, message: str = "This invitation is already locked."):
        super().__init__(message, status.HTTP_409_CONFLICT)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(f"{request.url.path} rejected ({exc.status_code}): {exc.message}")
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body.")


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Storage error on {request.url.path}")
    # DBAPIError wraps the driver exception, whose message is the useful part
    message = str(getattr(exc, "orig", None) or exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unable to process request.")


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    HTTPException: http_exception_handler,
    RequestValidationError: validation_error_handler,
    SQLAlchemyError: storage_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
