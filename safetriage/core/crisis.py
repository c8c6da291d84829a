"""Crisis detection for suicide, self-harm and overdose disclosures.

This path is independent of the scored rule catalog: a detected crisis always
produces the fixed resource text, whatever the aggregate urgency score is.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Tuple

from ..schemas.safety import CrisisType, HealthContext
from .normalizer.text import normalize_text

__all__ = ["CRISIS_RESOURCES", "crisis_type_for", "detect_crisis_type", "format_crisis_response"]

CRISIS_RESOURCES: Dict[str, str] = {
    "suicide": (
        "If you're in the U.S., call or text 988 (Suicide & Crisis Lifeline). "
        "You are not alone, and trained counselors are available 24/7."
    ),
    "self_harm": (
        "If you're in the U.S., call or text 988 (Suicide & Crisis Lifeline). "
        "You deserve support, and help is available."
    ),
    "overdose": (
        "Call 911 immediately. If in the U.S., you can also call Poison Control at 1-800-222-1222. "
        "If this was intentional, also call or text 988 (Suicide & Crisis Lifeline)."
    ),
    "immediate_danger": "If you or someone else is in immediate danger, please call 911 now.",
}

# Checked in order; the first hit decides the crisis type.
_CRISIS_PATTERNS: Tuple[Tuple[CrisisType, re.Pattern[str]], ...] = (
    (
        "suicide",
        re.compile(
            r"(want|going|plan(ning)?)\s*to\s*(kill|hurt|end)\s*(myself|my\s*life|self)|suicid(e|al)",
            re.IGNORECASE,
        ),
    ),
    ("self_harm", re.compile(r"self[- ]harm|cutting\s*(myself|self)|hurt(ing)?\s*myself", re.IGNORECASE)),
    ("overdose", re.compile(r"overdos(e|ed|ing)|took\s*too\s*many\s*(pills|medication)", re.IGNORECASE)),
)


def detect_crisis_type(text: str) -> CrisisType:
    normalized = normalize_text(text)
    if not normalized:
        return "none"
    for crisis_type, pattern in _CRISIS_PATTERNS:
        if pattern.search(normalized):
            return crisis_type
    return "none"


def crisis_type_for(texts: Iterable[str] | HealthContext) -> CrisisType:
    """Return the first crisis found across several text fields."""

    if isinstance(texts, HealthContext):
        texts = (texts.primary_symptom, *texts.associated_symptoms, texts.additional_notes or "")
    for text in texts:
        crisis_type = detect_crisis_type(text)
        if crisis_type != "none":
            return crisis_type
    return "none"


def format_crisis_response(crisis_type: CrisisType, include_immediate_danger: bool = False) -> str:
    """Build the resource text that must be shown verbatim to the user."""

    if crisis_type == "none":
        return ""
    parts = []
    if include_immediate_danger:
        parts.append(CRISIS_RESOURCES["immediate_danger"])
    parts.append(CRISIS_RESOURCES[crisis_type])
    return "\n\n".join(parts)
