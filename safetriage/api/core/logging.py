"""Logging helpers for the safetriage service."""
from __future__ import annotations

import logging
import re
import time
from typing import Callable

from fastapi import FastAPI, Request

# US phone numbers and SSNs.
_RE_SENSITIVE = re.compile(r"(\b\d{3}-\d{2}-\d{4}\b|\(?\b\d{3}\)?[-. ]?\d{3}[-. ]\d{4}\b)")


def _redact(value: object) -> object:
    if isinstance(value, str):
        return _RE_SENSITIVE.sub("[REDACTED]", value)
    return value


class PHIRedactor(logging.Filter):
    """Filter that redacts simple personal identifiers from log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.msg = _redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_redact(arg) for arg in record.args)
        return True


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure global logging handlers."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, PHIRedactor) for f in handler.filters):
            handler.addFilter(PHIRedactor())
    logging.getLogger("uvicorn.access").addFilter(PHIRedactor())


async def timing_middleware(request: Request, call_next: Callable):
    """Log HTTP request duration."""

    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logging.getLogger("safetriage.request").info(
        "%s %s completed in %.2f ms", request.method, request.url.path, duration_ms
    )
    return response


def register_middleware(app: FastAPI) -> None:
    app.middleware("http")(timing_middleware)
