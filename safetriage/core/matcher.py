"""Context-aware red-flag matching over free text."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..schemas.safety import EmergencyCheckResult, PatientContext, RedFlagRule
from .catalog import RedFlagCatalog, get_catalog
from .normalizer.text import normalize_text

__all__ = ["detect_emergency", "match_symptoms", "rule_applies"]

logger = logging.getLogger(__name__)

_NO_CONTEXT = PatientContext()


def rule_applies(rule: RedFlagRule, context: PatientContext) -> bool:
    """Return whether *rule* is in scope for this patient.

    Context-gated rules need at least one of their tags; an age restriction is
    only enforced when the patient's age is known.
    """

    if rule.requires_context and not rule.requires_context & context.tags:
        return False
    if rule.age_restriction is not None and context.age_in_years is not None:
        return rule.age_restriction.contains(context.age_in_years)
    return True


def _keyword_hits(normalized: str, keywords: Iterable[str]) -> List[str]:
    hits = []
    for keyword in keywords:
        if keyword and normalize_text(keyword) in normalized and keyword not in hits:
            hits.append(keyword)
    return hits


def _confidence(rules: List[RedFlagRule], detected: List[str]) -> float:
    if rules:
        max_boost = max(rule.urgency_boost for rule in rules)
        return min(0.5 + len(rules) * 0.15 + (max_boost / 50) * 0.3, 1.0)
    if detected:
        return min(len(detected) * 0.3 + 0.5, 1.0)
    return 0.0


def match_symptoms(
    text: str,
    context: PatientContext,
    catalog: Optional[RedFlagCatalog] = None,
) -> EmergencyCheckResult:
    """Evaluate every applicable rule against *text*.

    All matching rules are kept (no early exit) so callers can pick the most
    severe one. Plain legacy keywords are reported alongside rule descriptions.
    """

    catalog = catalog or get_catalog()
    normalized = normalize_text(text)
    if not normalized:
        return EmergencyCheckResult(is_emergency=False)

    detected = _keyword_hits(normalized, catalog.legacy_keywords)
    matched: List[RedFlagRule] = []
    seen_ids = set()
    for rule in catalog.rules:
        if rule.id in seen_ids or not rule_applies(rule, context):
            continue
        if rule.pattern.search(normalized):
            seen_ids.add(rule.id)
            matched.append(rule)
            if rule.description not in detected:
                detected.append(rule.description)

    if matched:
        logger.debug("Matched red-flag rules: %s", ", ".join(rule.id for rule in matched))
    return EmergencyCheckResult(
        is_emergency=bool(detected or matched),
        detected_symptoms=tuple(detected),
        confidence=_confidence(matched, detected),
        matched_rules=tuple(matched),
    )


def detect_emergency(text: str, catalog: Optional[RedFlagCatalog] = None) -> EmergencyCheckResult:
    """Match *text* for a patient with no known demographics.

    Pregnancy, pediatric and senior rules never fire here.
    """

    return match_symptoms(text, _NO_CONTEXT, catalog)
