"""Error taxonomy of the Workin API and its translation to JSON responses."""

from __future__ import annotations

import re

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from workin.logging_config import get_logger


logger = get_logger(__name__)

# ASCII digits only; int() would also take "1_0" and other Unicode digits.
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


class WorkinError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(WorkinError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidPage(ValidationFailed):
    default_message = "Invalid page number"


class InvalidLimit(ValidationFailed):
    default_message = "Invalid limit (1-100)"


class InvalidIdentifier(ValidationFailed):
    default_message = "Invalid ID"


class InvalidStatus(ValidationFailed):
    default_message = "Invalid status"


class InvalidPayload(ValidationFailed):
    default_message = "All required fields must be filled"


class AuthenticationFailed(WorkinError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Unauthorized(WorkinError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFound(WorkinError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(WorkinError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class StorageError(WorkinError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"


def parse_identifier(raw: str | int | None, label: str) -> int:
    """Parse a path-bound identifier, which must be a positive integer."""
    text = str(raw).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise InvalidIdentifier(f"Invalid {label} ID")
    value = int(text)
    if value < 1:
        raise InvalidIdentifier(f"Invalid {label} ID")
    return value


def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _workin_error_handler(request: Request, exc: WorkinError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _message_response(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return _message_response(status.HTTP_400_BAD_REQUEST, message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _message_response(exc.status_code, "Route not found")
    return _message_response(exc.status_code, str(exc.detail))


async def _storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _message_response(StorageError.status_code, StorageError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkinError, _workin_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _storage_error_handler)
