"""FastAPI application bootstrap."""
from __future__ import annotations

from fastapi import FastAPI

from .. import __version__
from ..core.catalog import reload_catalog
from .core.config import settings
from .core.logging import register_middleware, setup_logging
from .core.security import enable_cors
from .routers import health, safety

setup_logging(settings.log_level)
if settings.catalog_path is not None:
    reload_catalog(settings.catalog_path)

app = FastAPI(title=settings.app_title, version=__version__)

register_middleware(app)
enable_cors(app, settings.cors_origins)

app.include_router(health.router)
app.include_router(safety.router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": settings.app_title, "health": "/health"}
