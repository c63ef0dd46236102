"""Map domain exceptions onto HTTP responses.

Every body has the same shape: ``{"code", "message", "errors"}``. Unexpected
exceptions are logged and answered with a generic 500 that leaks nothing.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from shared.exceptions import PaymentDeclined

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    ValidationError: 400,
    PaymentDeclined: 402,
    ObjectNotFoundError: 404,
    InvalidOperationError: 409,
}

_DEFAULT_CODES = {
    ValidationError: "validation_error",
    ObjectNotFoundError: "not_found",
    InvalidOperationError: "invalid_operation",
}


def _lookup(exc: Exception, table: dict, default):
    for cls in type(exc).__mro__:
        if cls in table:
            return table[cls]
    return default


def _message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if message:
        return message

    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return "; ".join(f"{field}: {', '.join(map(str, errors))}" for field, errors in messages.items())
    if messages:
        return str(messages)
    return type(exc).__name__


def _body(exc: Exception) -> dict:
    messages = getattr(exc, "messages", None)
    return {
        "code": getattr(exc, "code", None) or _lookup(exc, _DEFAULT_CODES, "error"),
        "message": _message(exc),
        "errors": messages if isinstance(messages, dict) else {},
    }


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = _lookup(exc, _STATUS_CODES, 400)
    body = _body(exc)
    logger.info(
        "Request rejected",
        path=request.url.path,
        code=body["code"],
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=body)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_error",
            "message": "Internal server error",
            "errors": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class in _STATUS_CODES:
        app.add_exception_handler(exc_class, domain_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
