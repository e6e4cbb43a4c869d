"""Maps domain and storage failures onto HTTP responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from greenmarket.domain.exceptions import (
    ActorError,
    AuthenticationError,
    ConcurrencyError,
    DomainException,
    NotFoundError,
    StateError,
    ValidationError,
)
from greenmarket.infrastructure.persistence.errors import StorageError

logger = structlog.get_logger(__name__)

# Most specific class first; the first isinstance match wins.
_STATUS_BY_ERROR: list[tuple[type[DomainException], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ActorError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StateError, status.HTTP_400_BAD_REQUEST),
    (ConcurrencyError, status.HTTP_409_CONFLICT),
]


def status_for(exc: DomainException) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _domain_error(request: Request, exc: DomainException) -> JSONResponse:
    code = status_for(exc)
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=code,
        message=str(exc),
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("storage_failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal storage error"},
    )


async def _body_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, _domain_error)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(RequestValidationError, _body_error)
