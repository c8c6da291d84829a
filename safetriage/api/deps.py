"""Common FastAPI dependencies."""
from __future__ import annotations

from ..core.catalog import RedFlagCatalog, get_catalog


def get_active_catalog() -> RedFlagCatalog:
    return get_catalog()
