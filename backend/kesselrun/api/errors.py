"""Translation of domain errors into problem-details responses."""
import logging
from typing import Dict, Type

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kesselrun.core.config import settings
from kesselrun.shared_kernel.exceptions import (
    ConfigurationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    HandlerExecutionError,
    NotRegisteredError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: Dict[Type[DomainException], int] = {
    ValidationFailedError: 422,
    EntityNotFoundError: 404,
    ConflictError: 409,
    NotRegisteredError: 500,
    ConfigurationError: 500,
    HandlerExecutionError: 500,
    DomainException: 400,
}

TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def status_for(exc: DomainException) -> int:
    for klass in type(exc).__mro__:
        if klass in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[klass]
    return 500


def log_level_for(status_code: int) -> int:
    return logging.ERROR if status_code >= 500 else logging.WARNING


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map a domain error to a problem-details body."""
    status_code = status_for(exc)
    logger.log(
        log_level_for(status_code),
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
        exc_info=status_code >= 500,
    )

    # Internal failures only expose their message in debug mode.
    detail = exc.message if status_code < 500 or settings.DEBUG else "An internal error occurred"
    content = {
        "type": "about:blank",
        "title": TITLES.get(status_code, "Error"),
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "code": exc.code,
    }
    if isinstance(exc, ValidationFailedError):
        content["errors"] = exc.details["errors"]
    return JSONResponse(status_code=status_code, content=content)


def _field_name(location) -> str:
    # Drop the leading "body"/"query"/"path" segment FastAPI adds.
    parts = [str(part) for part in location]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header", "cookie"):
        parts = parts[1:]
    return ".".join(parts)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report model-binding failures in the same shape as business validation."""
    errors = [
        {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed on %s %s: %d error(s)",
        request.method,
        request.url.path,
        len(errors),
    )
    return JSONResponse(
        status_code=422,
        content={
            "type": "about:blank",
            "title": TITLES[422],
            "status": 422,
            "detail": "; ".join(f"{item['field']}: {item['message']}" for item in errors),
            "instance": request.url.path,
            "code": ValidationFailedError.default_code,
            "errors": errors,
        },
    )
