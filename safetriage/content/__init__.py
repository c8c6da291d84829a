"""Helpers to load the red-flag rule catalog and audit case data."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List

import yaml

__all__ = ["DEFAULT_CATALOG", "load_audit_cases", "load_catalog_data"]

DEFAULT_CATALOG = "red_flags"


@lru_cache(maxsize=8)
def _load_packaged(name: str) -> Dict[str, Any]:
    with resources.files(__name__).joinpath(f"{name}.yml").open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _load_file(path: str | Path) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def load_catalog_data(path: str | Path | None = None) -> Dict[str, Any]:
    """Return the raw YAML mapping for the packaged catalog or *path*."""

    if path is None:
        return _load_packaged(DEFAULT_CATALOG)
    return _load_file(path)


def load_audit_cases(path: str | Path | None = None) -> List[Dict[str, Any]]:
    """Return the audit cases shipped with the package, or those in *path*."""

    data = _load_packaged("audit_cases") if path is None else _load_file(path)
    return list(data.get("cases", []) or [])
