# app/core/errors.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Todo text is required"
TODO_NOT_FOUND = "Todo not found"
INVALID_CREDENTIALS = "Invalid credentials"


class TodoError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(TodoError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = TEXT_REQUIRED


class NotFoundError(TodoError):
    status_code = status.HTTP_404_NOT_FOUND
    message = TODO_NOT_FOUND


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.status_code)
    return failure_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    else:
        message = "Invalid request body"
    logger.info("%s %s malformed body: %s", request.method, request.url.path, message)
    return failure_response(status.HTTP_400_BAD_REQUEST, message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
