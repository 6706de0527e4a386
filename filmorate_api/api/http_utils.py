"""Maps domain exceptions to HTTP responses ``{"error": ..., "message": ...}``."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filmorate_api.core.exceptions import (
    DuplicatedDataError,
    FilmorateError,
    NotFoundError,
    ValidationError,
)

log = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[FilmorateError], HTTPStatus] = {
    ValidationError: HTTPStatus.BAD_REQUEST,
    NotFoundError: HTTPStatus.NOT_FOUND,
    DuplicatedDataError: HTTPStatus.BAD_REQUEST,
}

EMPTY_BODY_MESSAGE = "Request body must not be empty"


def error_body(category: str, message: str) -> dict[str, str]:
    return {"error": category, "message": message}


def status_for(exc: FilmorateError) -> HTTPStatus:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return HTTPStatus.INTERNAL_SERVER_ERROR


def describe_request_error(exc: RequestValidationError) -> str:
    """First pydantic error as ``field: message``; unreadable body is fixed."""
    errors = exc.errors()
    if not errors:
        return EMPTY_BODY_MESSAGE
    first = errors[0]
    loc = tuple(first.get("loc", ()))
    # тела нет совсем или это не JSON
    if first.get("type") == "json_invalid" or (
            first.get("type") == "missing" and loc == ("body",)):
        return EMPTY_BODY_MESSAGE
    field = ".".join(str(part) for part in loc[1:]) or str(loc[0])
    return f"{field}: {first.get('msg', 'invalid value')}"


async def filmorate_error_handler(
        request: Request, exc: FilmorateError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc),
                        content=error_body(exc.category, exc.message))


async def request_validation_handler(
        request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_request_error(exc)
    log.warning("request_rejected",
                extra={"path": request.url.path, "reason": message})
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST,
                        content=error_body(ValidationError.category, message))


def category_for_status(status_code: int) -> str:
    if status_code == HTTPStatus.NOT_FOUND:
        return NotFoundError.category
    if status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        return ValidationError.category
    return FilmorateError.category


async def http_error_handler(
        request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and other framework-raised errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(category_for_status(exc.status_code),
                           str(exc.detail)),
        headers=getattr(exc, "headers", None))


async def unhandled_error_handler(
        request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", exc_info=exc,
              extra={"path": request.url.path})
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content=error_body(FilmorateError.category, str(exc) or "internal_error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FilmorateError, filmorate_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError,
                              request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
