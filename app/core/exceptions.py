import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

class BookingAppError(Exception):
    """Base class for errors raised by the booking services."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(BookingAppError):
    status_code = status.HTTP_400_BAD_REQUEST

class InvalidStatusTransition(ValidationError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change booking status from {current} to {requested}")
        self.current = current
        self.requested = requested

class NotFoundError(BookingAppError):
    status_code = status.HTTP_404_NOT_FOUND

class ConflictError(BookingAppError):
    status_code = status.HTTP_409_CONFLICT

class PersistenceError(BookingAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

class NotificationError(BookingAppError):
    """Email delivery failure. Recorded per channel, never returned as a request failure."""

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

async def booking_error_handler(request: Request, exc: BookingAppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)

async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)

async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"error": message}."""
    app.add_exception_handler(BookingAppError, booking_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
