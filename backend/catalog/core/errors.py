"""Error envelope and FastAPI exception handlers."""

from __future__ import annotations

import logging
from enum import StrEnum
from http import HTTPStatus
from typing import Awaitable, Callable, Mapping, NamedTuple, Sequence, assert_never, cast

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.exceptions.service_error import (
    BusinessRule,
    Database,
    DomainServiceException,
    ExternalService,
    NotFound,
    ServiceError,
    Unknown,
    Validation,
)

ExceptionHandlerCallable = Callable[[Request, Exception], Awaitable[Response]]

logger = logging.getLogger("catalog.errors")

DATABASE_ERROR_MESSAGE = "A database error occurred."
EXTERNAL_SERVICE_ERROR_MESSAGE = (
    "A required external service is currently unavailable. Please try again later."
)
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


class ErrorCode(StrEnum):
    """Canonical error codes of the public error envelope."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    DATABASE_ERROR = "DATABASE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"


class ErrorMapping(NamedTuple):
    status_code: int
    code: ErrorCode
    message: str
    details: dict[str, str] | None = None


def map_service_error(error: ServiceError) -> ErrorMapping:
    """Translate a service error into its transport status.

    Internal causes (database and peer failures) are replaced by generic
    messages so they never reach the client.
    """
    match error:
        case NotFound(entity=entity, id=entity_id):
            return ErrorMapping(
                status.HTTP_404_NOT_FOUND,
                ErrorCode.NOT_FOUND,
                error.message,
                {"entity": entity, "id": entity_id},
            )
        case Validation(field=field):
            return ErrorMapping(
                status.HTTP_400_BAD_REQUEST,
                ErrorCode.VALIDATION_ERROR,
                error.message,
                {"field": field},
            )
        case BusinessRule(rule=rule):
            return ErrorMapping(
                status.HTTP_400_BAD_REQUEST,
                ErrorCode.BUSINESS_RULE_VIOLATION,
                error.message,
                {"rule": rule},
            )
        case Database():
            return ErrorMapping(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorCode.DATABASE_ERROR,
                DATABASE_ERROR_MESSAGE,
            )
        case ExternalService():
            return ErrorMapping(
                status.HTTP_503_SERVICE_UNAVAILABLE,
                ErrorCode.SERVICE_UNAVAILABLE,
                EXTERNAL_SERVICE_ERROR_MESSAGE,
            )
        case Unknown():
            return ErrorMapping(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorCode.INTERNAL_ERROR,
                INTERNAL_ERROR_MESSAGE,
            )
        case _:
            assert_never(error)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach global exception handlers to the FastAPI app."""

    app.add_exception_handler(
        DomainServiceException,
        cast(ExceptionHandlerCallable, service_exception_handler),
    )
    app.add_exception_handler(
        RequestValidationError,
        cast(ExceptionHandlerCallable, request_validation_exception_handler),
    )
    app.add_exception_handler(
        StarletteHTTPException,
        cast(ExceptionHandlerCallable, http_exception_handler),
    )
    app.add_exception_handler(
        Exception,
        cast(ExceptionHandlerCallable, unexpected_exception_handler),
    )


async def service_exception_handler(
    request: Request,
    exc: DomainServiceException,
) -> JSONResponse:
    mapping = map_service_error(exc.error)
    log = logger.error if mapping.status_code >= 500 else logger.warning
    log(
        "Service error",
        extra={
            "error_kind": exc.error.kind,
            "error_message": exc.error.message,
            "http_method": request.method,
            "http_path": request.url.path,
            "status_code": mapping.status_code,
        },
    )
    return error_response(
        status_code=mapping.status_code,
        code=mapping.code,
        message=mapping.message,
        details=mapping.details,
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    details = _format_validation_errors(exc)
    return error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code=ErrorCode.VALIDATION_ERROR,
        message="Request validation failed.",
        details=details or None,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    return error_response(
        status_code=exc.status_code,
        code=_default_code_for_status(exc.status_code),
        message=str(exc.detail or HTTPStatus(exc.status_code).phrase),
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception during request",
        exc_info=(exc.__class__, exc, exc.__traceback__),
    )
    return error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorCode.INTERNAL_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
    )


def error_response(
    *,
    status_code: int,
    code: ErrorCode | str,
    message: str,
    details: object | None = None,
) -> JSONResponse:
    """Return JSONResponse adhering to the public error contract."""
    body = build_error_payload(code=code, message=message, details=details)
    return JSONResponse(content=jsonable_encoder(body), status_code=status_code)


def build_error_payload(
    *,
    code: ErrorCode | str,
    message: str,
    details: object | None = None,
) -> dict[str, dict[str, object]]:
    error_section: dict[str, object] = {
        "code": str(code),
        "message": message,
    }
    if details is not None:
        error_section["details"] = details
    return {"error": error_section}


def _format_validation_errors(exc: RequestValidationError) -> dict[str, str]:
    formatted: dict[str, str] = {}
    for error in exc.errors():
        field = _format_error_location(error.get("loc") or ())
        message = error.get("msg", "Invalid value")
        if field in formatted:
            formatted[field] = f"{formatted[field]}; {message}"
        else:
            formatted[field] = message
    return formatted


def _format_error_location(location: Sequence[object]) -> str:
    filtered = [
        str(part)
        for part in location
        if part not in {"body", "query", "path"}  # hide transport-specific prefixes
    ]
    if not filtered:
        filtered = [str(part) for part in location]
    return ".".join(filtered) if filtered else "_schema"


def _default_code_for_status(status_code: int) -> str:
    mapping: Mapping[int, ErrorCode] = {
        status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
        status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
        status.HTTP_503_SERVICE_UNAVAILABLE: ErrorCode.SERVICE_UNAVAILABLE,
    }
    return mapping.get(status_code, ErrorCode.INTERNAL_ERROR)


__all__ = [
    "ErrorCode",
    "ErrorMapping",
    "build_error_payload",
    "error_response",
    "http_exception_handler",
    "map_service_error",
    "register_exception_handlers",
    "request_validation_exception_handler",
    "service_exception_handler",
    "unexpected_exception_handler",
]
