"""Centralized exception handlers for FastAPI application.

Every error leaves the API in the same envelope:
``{"success": false, "error": "...", "details": [...], "stack": "..."}``.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from thesis_registry.config import get_settings
from thesis_registry.exceptions import (
    AggregateValidationError,
    DatabaseError,
    DuplicateRecordError,
    InvalidFilterError,
    InvalidReferenceError,
    ModelError,
    RecordInUseError,
    RecordNotFoundError,
)
from thesis_registry.utils.api_helpers import entity_label

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
INVALID_REFERENCE_MESSAGE = (
    "Cannot create or update this record because the referenced item does not exist."
)
DATABASE_ERROR_MESSAGE = "A database error occurred. Please try again later."

# (entity being deleted, table still pointing at it) -> message
IN_USE_MESSAGES: dict[tuple[str, str], str] = {
    ("University", "institutes"): (
        "Cannot delete this university because it has associated institutes. "
        "Please delete or reassign the institutes first."
    ),
    ("Institute", "theses"): (
        "Cannot delete this institute because it has associated theses. "
        "Please delete or reassign the theses first."
    ),
    ("Person", "theses"): (
        "Cannot delete this person because they are associated with theses "
        "(as author or supervisor). Please remove these associations first."
    ),
    ("Person", "supervisor_assignments"): (
        "Cannot delete this person because they are associated with theses "
        "(as author or supervisor). Please remove these associations first."
    ),
    ("SubjectTopic", "thesis_subject_topics"): (
        "Cannot delete this subject topic because it is associated with theses. "
        "Please remove these associations first."
    ),
}

# Used when the referencing table has no dedicated message
IN_USE_FALLBACKS: dict[str, str] = {
    "University": (
        "Cannot delete this university because it is referenced by other "
        "records. Please remove the references first."
    ),
    "Institute": (
        "Cannot delete this institute because it is referenced by other "
        "records. Please remove the references first."
    ),
    "Person": (
        "Cannot delete this person because they are referenced by other "
        "records. Please remove the references first."
    ),
    "SubjectTopic": (
        "Cannot delete this subject topic because it is referenced by other "
        "records. Please remove the references first."
    ),
    "Thesis": (
        "Cannot delete this thesis because it is referenced by other records. "
        "Please remove the references first."
    ),
}

GENERIC_IN_USE_MESSAGE = (
    "Cannot delete this item because it is referenced by other records. "
    "Please remove the references first."
)


def in_use_message(model_name: str, referenced_by: Optional[str]) -> str:
    """Pick the user-facing message for a rejected delete.

    Args:
        model_name: Model class name of the record being deleted.
        referenced_by: Table still referencing the record, if known.

    Returns:
        Entity and table specific message, or the closest fallback.
    """
    if referenced_by and (model_name, referenced_by) in IN_USE_MESSAGES:
        return IN_USE_MESSAGES[(model_name, referenced_by)]
    return IN_USE_FALLBACKS.get(model_name, GENERIC_IN_USE_MESSAGE)


@dataclass(frozen=True, slots=True)
class ExceptionConfig:
    """Configuration for exception handler behavior."""

    status_code: int
    log_level: str = "warning"
    include_detail: bool = True


# Exception type to configuration mapping
EXCEPTION_CONFIGS: dict[type[Exception], ExceptionConfig] = {
    RecordNotFoundError: ExceptionConfig(status_code=status.HTTP_404_NOT_FOUND),
    RecordInUseError: ExceptionConfig(status_code=status.HTTP_400_BAD_REQUEST),
    InvalidReferenceError: ExceptionConfig(status_code=status.HTTP_400_BAD_REQUEST),
    InvalidFilterError: ExceptionConfig(status_code=status.HTTP_400_BAD_REQUEST),
    AggregateValidationError: ExceptionConfig(
        status_code=status.HTTP_400_BAD_REQUEST
    ),
    DuplicateRecordError: ExceptionConfig(status_code=status.HTTP_409_CONFLICT),
    DatabaseError: ExceptionConfig(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        log_level="error",
        include_detail=False,
    ),
    ModelError: ExceptionConfig(
        status_code=status.HTTP_400_BAD_REQUEST,
        log_level="error",
    ),
}


def _log_exception(exc: Exception, config: ExceptionConfig) -> None:
    """Log exception with appropriate level."""
    log_func: Callable[..., None] = getattr(logger, config.log_level)
    log_func(f"{type(exc).__name__}: {exc}")


def error_message(exc: Exception, config: ExceptionConfig) -> str:
    """Build the ``error`` string for a domain exception."""
    if isinstance(exc, RecordNotFoundError):
        return f"{entity_label(exc.model_name)} not found"
    if isinstance(exc, RecordInUseError):
        return in_use_message(exc.model_name, exc.referenced_by)
    if isinstance(exc, InvalidReferenceError):
        return INVALID_REFERENCE_MESSAGE
    if isinstance(exc, DatabaseError) or not config.include_detail:
        return DATABASE_ERROR_MESSAGE
    return str(exc)


def error_body(error: str, **extra: Any) -> dict[str, Any]:
    """Error envelope; keys whose value is None are left out."""
    content: dict[str, Any] = {"success": False, "error": error}
    content.update({key: value for key, value in extra.items() if value is not None})
    return content


def _create_handler(
    config: ExceptionConfig,
) -> Callable[[Request, Exception], Any]:
    """Create exception handler function for given config."""

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        _log_exception(exc, config)
        return JSONResponse(
            status_code=config.status_code,
            content=error_body(error_message(exc, config)),
        )

    return handler


def _error_path(loc: Iterable[Any]) -> str:
    """Dotted field path without the body/query/path location prefix."""
    parts = list(loc)
    if parts and parts[0] in ("body", "query", "path", "header", "cookie"):
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def validation_details(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """Convert Pydantic error dicts into ``{path, message}`` pairs."""
    return [
        {"path": _error_path(err.get("loc", ())), "message": err.get("msg", "")}
        for err in errors
    ]


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors (body, query and path)."""
    details = validation_details(exc.errors())
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"details": details},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(VALIDATION_FAILED, details=details),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render Starlette HTTP errors (unknown routes, wrong methods) as envelopes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    logger.warning(f"{exc.status_code} {request.method} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    stack = None
    if not get_settings().is_production:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", stack=stack),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    for exc_type, config in EXCEPTION_CONFIGS.items():
        app.add_exception_handler(exc_type, _create_handler(config))

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
