"""
Error taxonomy and the FastAPI handlers that render it.

Services raise these instead of HTTPException so the same code paths can be
exercised without a web request. Every error renders as
{"detail": <message>, "code": <machine code>}.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "CONTENT_ERROR"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ContentError):
    code = "VALIDATION_ERROR"


class MalformedInput(ValidationError):
    code = "MALFORMED_INPUT"

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"Invalid JSON format for {field}")
        self.field = field


class ReferenceNotFound(ContentError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "REFERENCE_NOT_FOUND"

    def __init__(self, reference_id: str, *, kind: str = "Tag"):
        super().__init__(f"{kind} with ID {reference_id} not found")
        self.reference_id = reference_id


class Unauthorized(ContentError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class Forbidden(ContentError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class DuplicateTag(ContentError):
    code = "DUPLICATE_TAG"

    def __init__(self, message: str = "Duplicate tags detected. Please ensure each tag is only added once."):
        super().__init__(message)


class CreationFailed(ContentError):
    code = "CREATION_FAILED"

    def __init__(self, kind: str, cause: BaseException):
        super().__init__(f"Failed to create {kind}: {cause}")
        self.cause = cause


class UpstreamFailure(ContentError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "UPSTREAM_FAILURE"

    @classmethod
    def from_exception(cls, exc: BaseException, *, status_code: int | None = None) -> "UpstreamFailure":
        return cls(str(exc) or "An unknown error occurred", status_code=status_code)


def _render(exc: ContentError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ContentError)
    async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed path=%s code=%s error=%s", request.url.path, exc.code, exc.message)
        else:
            logger.info("request_rejected path=%s code=%s error=%s", request.url.path, exc.code, exc.message)
        return _render(exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error path=%s error_type=%s", request.url.path, type(exc).__name__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred.", "code": "INTERNAL_ERROR"},
        )


@contextmanager
def upstream_errors(*, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> Iterator[None]:
    """
    Let taxonomy errors through; turn anything else into UpstreamFailure
    carrying the original error string.
    """
    try:
        yield
    except ContentError:
        raise
    except Exception as exc:
        logger.exception("upstream_failure error_type=%s", type(exc).__name__)
        raise UpstreamFailure.from_exception(exc, status_code=status_code) from exc
