"""Utilities for normalising free-text symptom descriptions."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["normalize_text"]


_WHITESPACE_RE = re.compile(r"\s+")
_QUOTES = str.maketrans({"‘": "'", "’": "'", "ʼ": "'", "“": '"', "”": '"'})


def normalize_text(value: str) -> str:
    """Return a lower-cased, accentless version of *value* suitable for matching."""

    if not isinstance(value, str):
        return ""
    normalized = unicodedata.normalize("NFKD", value.translate(_QUOTES))
    normalized = normalized.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower().strip()
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized
