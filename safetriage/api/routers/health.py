"""Health check endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_active_catalog

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
def healthcheck(catalog=Depends(get_active_catalog)) -> dict[str, str | int]:
    return {
        "status": "ok",
        "catalog_version": catalog.version,
        "rules": len(catalog.rules),
    }
