from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

from noteboard.core.errors import (
    AccessDeniedError,
    AuthError,
    BackendError,
    NotAuthenticatedError,
)
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)


async def _not_authenticated(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _access_denied(request: Request, exc: AccessDeniedError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _auth_failed(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def _backend_failed(request: Request, exc: BackendError) -> JSONResponse:
    logger.error(
        "Record store failure",
        extra={"path": request.url.path, "method": request.method, "error": str(exc)},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Storage service error. Please try again."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP responses."""
    app.add_exception_handler(NotAuthenticatedError, _not_authenticated)
    app.add_exception_handler(AccessDeniedError, _access_denied)
    app.add_exception_handler(AuthError, _auth_failed)
    app.add_exception_handler(BackendError, _backend_failed)
