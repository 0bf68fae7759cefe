# courseprofs/errors.py
"""
Error taxonomy and FastAPI exception handlers.

Services raise these exceptions; the handlers registered on the app turn
them into ``{"detail": ...}`` JSON responses with the mapped status code.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CourseProfsError(Exception):
    """Base class for errors surfaced directly to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_content(self) -> Dict[str, Any]:
        return {"detail": self.message}


class ValidationError(CourseProfsError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]

    def to_content(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class Unauthorized(CourseProfsError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(CourseProfsError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[Any] = None, message: Optional[str] = None):
        if message is None:
            if entity_id is None:
                message = f"No {entity} found"
            else:
                message = f"No {entity} with Id {entity_id} found in database"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class Conflict(CourseProfsError):
    status_code = status.HTTP_409_CONFLICT


class InvalidPage(CourseProfsError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, page: int, total_pages: int):
        super().__init__("Page doesn't exist")
        self.page = page
        self.total_pages = total_pages


# ======================
# HANDLERS
# ======================

def _field_name(loc) -> str:
    # ("body", "Rating") -> "Rating", ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def course_profs_error_handler(request: Request, exc: CourseProfsError) -> JSONResponse:
    logger.warning("%s %s -> HTTP %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await course_profs_error_handler(request, validation_error_from(exc.errors()))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors"""
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourseProfsError, course_profs_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)


def validation_error_from(errors: Iterable[Dict[str, Any]]) -> ValidationError:
    """Build a ValidationError from pydantic/FastAPI error dicts."""
    return ValidationError([
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
        for err in errors
    ])
