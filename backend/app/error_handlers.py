"""
Exception handlers for FastAPI.

Maps domain exceptions from ``devconnector.exceptions`` to status codes
and payloads:
- field validation failures: 400 with a structured ``errors`` list
- credential failures: 400 with an ``errors`` list
- everything else known: ``{"msg": ...}`` with the mapped status
- unexpected failures: 500 with a plain-text body

Request IDs are logged server-side for tracing but NOT exposed to clients.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException

from devconnector.exceptions import (
    AuthError,
    DevConnectorError,
    EntryNotFoundError,
    EntryValidationError,
    GitHubProfileNotFoundError,
    GitHubUnavailableError,
    InvalidCredentialsError,
    InvalidIdError,
    NotFoundError,
    ProfileNotFoundError,
    TokenSigningError,
    UserAlreadyExistsError,
)
from devconnector.logging import get_context_value, get_logger

logger = get_logger("backend.errors")

SERVER_ERROR_TEXT = "Server Error"

# Most specific first; the first isinstance match wins
STATUS_BY_EXCEPTION: list[tuple[type[DevConnectorError], int]] = [
    (TokenSigningError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvalidCredentialsError, status.HTTP_400_BAD_REQUEST),
    (UserAlreadyExistsError, status.HTTP_400_BAD_REQUEST),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (ProfileNotFoundError, status.HTTP_400_BAD_REQUEST),
    (InvalidIdError, status.HTTP_400_BAD_REQUEST),
    (EntryNotFoundError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (EntryValidationError, status.HTTP_400_BAD_REQUEST),
    (GitHubProfileNotFoundError, status.HTTP_404_NOT_FOUND),
    (GitHubUnavailableError, status.HTTP_502_BAD_GATEWAY),
]

# Reported in the same ``errors`` list shape as field validation
ERROR_LIST_EXCEPTIONS = (InvalidCredentialsError, UserAlreadyExistsError)

_VALUE_ERROR_PREFIX = "Value error, "


def request_id_for(request: Request) -> str:
    """
    The id RequestIDMiddleware stored on the request.

    The 500 handler runs outside the middleware stack, after the log
    context has been cleared, so the bound value alone is not enough.
    """
    return getattr(request.state, "request_id", None) or get_context_value("request_id")


def status_for(exc: DevConnectorError) -> int:
    for exc_type, code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_errors(errors: list[dict]) -> list[dict]:
    """Flatten pydantic errors into ``{"msg", "param", "location"}`` entries."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else location
        msg = str(error.get("msg", "Invalid value"))
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX):]
        formatted.append({"msg": msg, "param": param, "location": location})
    return formatted


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.info(
            "validation_error",
            params=[e["param"] for e in errors],
            request_id=request_id_for(request),
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    @app.exception_handler(DevConnectorError)
    async def domain_exception_handler(request: Request, exc: DevConnectorError):
        code = status_for(exc)
        request_id = request_id_for(request)

        if code >= 500:
            logger.error(
                "domain_server_error",
                error_type=type(exc).__name__,
                error=exc.message,
                request_id=request_id,
                exc_info=exc.__cause__ or exc,
            )
            return PlainTextResponse(SERVER_ERROR_TEXT, status_code=code)

        logger.info(
            "domain_error",
            error_type=type(exc).__name__,
            status_code=code,
            request_id=request_id,
        )

        if isinstance(exc, EntryValidationError):
            content = {"errors": [{"msg": exc.message, "param": exc.param, "location": "body"}]}
        elif isinstance(exc, ERROR_LIST_EXCEPTIONS):
            content = {"errors": [{"msg": exc.message}]}
        else:
            content = {"msg": exc.message}
        return JSONResponse(status_code=code, content=content)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=request_id_for(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Full details stay in the server log
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id_for(request),
        )
        return PlainTextResponse(SERVER_ERROR_TEXT, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
