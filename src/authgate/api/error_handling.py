"""Exception handlers — one error shape for every failure.

Learn: Every error response has the same body:

    {"message": str, "errors": [{"field", "message"}]?, "statusCode": int}

Domain errors (AuthGateError) carry their own status code. FastAPI's
request validation errors become 400s with field-level detail. Database
failures and anything unexpected become a 500 whose message reveals
nothing about internals.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from authgate.errors import AuthGateError, InternalError
from authgate.schemas.validation import field_errors

logger = structlog.get_logger()


def error_response(
    status_code: int,
    message: str,
    errors: list[dict] | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    body: dict = {"message": message, "statusCode": status_code}
    if errors is not None:
        body["errors"] = errors
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for domain, validation, HTTP and storage errors."""

    @app.exception_handler(AuthGateError)
    async def handle_domain_error(request: Request, exc: AuthGateError):
        log_fn = logger.error if exc.status_code >= 500 else logger.info
        log_fn(
            "request.domain_error",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            error=exc.message,
        )
        return error_response(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = field_errors(exc.errors())
        logger.info(
            "request.validation_error",
            path=request.url.path,
            method=request.method,
            fields=[e["field"] for e in errors],
        )
        return error_response(400, "Validation failed", errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return error_response(exc.status_code, message, headers=exc.headers)

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception(
            "request.storage_error",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
        )
        return error_response(500, InternalError.default_message)

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception):
        logger.exception(
            "request.unhandled_exception",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
        )
        return error_response(500, InternalError.default_message)
