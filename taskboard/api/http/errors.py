import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.api.http.schemas import ErrorResponse
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import (
    DomainError,
    InvalidStatusError,
    TaskAlreadyExistsError,
    TaskNotFoundError,
    TaskValidationError,
)

logger = logging.getLogger(__name__)

MALFORMED_BODY_MESSAGE = "Malformed JSON request"
MISSING_BODY_MESSAGE = "Required request body is missing"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Wspólny kształt błędu: {timestamp, status, error, message, path}."""
    return JSONResponse(
        status_code=status_code,
        content={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": status_code,
            "error": HTTPStatus(status_code).phrase,
            "message": message,
            "path": request.url.path,
        },
    )


# Exception handlers
def task_not_found_handler(request: Request, exc: TaskNotFoundError):
    logger.warning(exc)
    return error_response(request, status.HTTP_404_NOT_FOUND, str(exc))


def task_already_exists_handler(request: Request, exc: TaskAlreadyExistsError):
    logger.warning(exc)
    return error_response(request, status.HTTP_409_CONFLICT, str(exc))


def invalid_status_handler(request: Request, exc: InvalidStatusError):
    logger.warning(exc)
    return error_response(request, status.HTTP_400_BAD_REQUEST, str(exc))


def task_validation_handler(request: Request, exc: TaskValidationError):
    logger.warning(exc)
    return error_response(request, status.HTTP_400_BAD_REQUEST, str(exc))


def domain_error_handler(request: Request, exc: DomainError):
    logger.warning(exc)
    return error_response(request, status.HTTP_400_BAD_REQUEST, str(exc))


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, str(exc.detail))


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


def validation_message(error: dict[str, Any]) -> str:
    """
    Komunikat dla pierwszego błędu walidacji FastAPI/pydantic.

    - body, zły JSON albo nie-obiekt -> MALFORMED_BODY_MESSAGE
    - body, zła wartość enuma -> "Invalid status value. Must be one of: PENDING, IN_PROGRESS, DONE"
    - query/path, zła wartość enuma -> "Invalid value 'X'. Must be one of: ..."
    - query/path, inny typ -> "Invalid value 'X' for parameter 'name': <powód>"
    """
    loc = error.get("loc") or ()
    source = loc[0] if loc else "body"
    kind = error.get("type", "")
    name = ".".join(str(part) for part in loc[1:])

    if source == "body":
        if kind in ("json_invalid", "model_attributes_type", "dict_type"):
            return MALFORMED_BODY_MESSAGE
        if kind == "missing" and len(loc) == 1:
            return MISSING_BODY_MESSAGE
        if kind == "enum":
            return f"Invalid {name} value. Must be one of: {TaskStatus.allowed_values()}"
        return f"{name}: {error.get('msg')}"

    value = error.get("input")
    if kind == "enum":
        return f"Invalid value '{value}'. Must be one of: {TaskStatus.allowed_values()}"
    return f"Invalid value '{value}' for parameter '{name}': {error.get('msg')}"


def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = validation_message(errors[0]) if errors else MALFORMED_BODY_MESSAGE
    logger.warning("Rejected request to %s: %s", request.url.path, message)
    return error_response(request, status.HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(TaskNotFoundError)(task_not_found_handler)
    app.exception_handler(TaskAlreadyExistsError)(task_already_exists_handler)
    app.exception_handler(InvalidStatusError)(invalid_status_handler)
    app.exception_handler(TaskValidationError)(task_validation_handler)
    app.exception_handler(DomainError)(domain_error_handler)
    app.exception_handler(Exception)(unexpected_exception_handler)


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def _error_example(status_code: int, message: str, path: str = "/tasks") -> dict[str, Any]:
    return {
        "timestamp": "2025-01-01T12:00:00+00:00",
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
        "path": path,
    }


def task_not_found_response() -> ResponseDict:
    return {
        404: {
            "model": ErrorResponse,
            "description": "Task not found",
            "content": {
                "application/json": {
                    "example": _error_example(
                        404,
                        "Task not found with id: 3fa85f64-5717-4562-b3fc-2c963f66afa6",
                        "/tasks/3fa85f64-5717-4562-b3fc-2c963f66afa6",
                    )
                }
            },
        }
    }


bad_request_response: ResponseDict = {
    400: {
        "model": ErrorResponse,
        "description": "Invalid request",
        "content": {
            "application/json": {"example": _error_example(400, "title: Title is required")}
        },
    }
}

internal_error_response: ResponseDict = {
    500: {
        "model": ErrorResponse,
        "description": "Internal server error",
        "content": {
            "application/json": {"example": _error_example(500, UNEXPECTED_ERROR_MESSAGE)}
        },
    }
}
