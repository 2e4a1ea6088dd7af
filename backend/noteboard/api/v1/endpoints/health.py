from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from noteboard.config import settings
from noteboard.core.errors import BackendError
from noteboard.core.repositories.record_store import RecordStore  # noqa: TCH001
from noteboard.core.resources import Collection
from noteboard.dependencies import get_record_store

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "noteboard-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(store: RecordStore = Depends(get_record_store)):
    """Readiness check endpoint."""
    store_status = "connected"
    try:
        await store.list(Collection.TAGS.value)
    except BackendError as e:
        store_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "record_store": store_status,
            "backend": settings.backend,
            "api_prefix": settings.api_prefix
        }
    )
