"""Urgency aggregation: score every signal source and map it to a triage level."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..schemas.safety import (
    AgeGroup,
    EmergencyCheckResult,
    HealthContext,
    PatientContext,
    RedFlagRule,
    SafetyAssessment,
    UrgencyLevel,
)
from .catalog import RedFlagCatalog, age_group_from_age, get_catalog
from .matcher import match_symptoms

__all__ = [
    "assess_urgency",
    "duration_modifier",
    "extract_patient_context",
    "resolve_age_group",
    "severity_modifier",
    "urgency_from_score",
]

logger = logging.getLogger(__name__)

_PREGNANCY_RE = re.compile(r"pregnan", re.IGNORECASE)

LEGACY_PRIMARY_BOOST = 50
ASSOCIATED_SYMPTOM_POINTS = 30
NOTES_POINTS = 20
PREGNANCY_POINTS = 15
CONSTANT_FREQUENCY_POINTS = 10
HIGH_RISK_CONDITION_POINTS = 10
PROFESSIONAL_REFERRAL_THRESHOLD = 20

_SCORE_LEVELS: Tuple[Tuple[int, UrgencyLevel], ...] = (
    (50, UrgencyLevel.EMERGENCY),
    (40, UrgencyLevel.URGENT),
    (30, UrgencyLevel.SOON),
    (20, UrgencyLevel.NON_URGENT),
    (10, UrgencyLevel.MONITOR),
)


@dataclass
class _Tally:
    score: int = 0
    reasoning: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)
    rules: Dict[str, RedFlagRule] = field(default_factory=dict)

    def add(self, points: int, reason: Optional[str] = None) -> None:
        self.score += points
        if reason:
            self.reasoning.append(reason)

    def absorb(self, check: EmergencyCheckResult) -> None:
        for symptom in check.detected_symptoms:
            if symptom not in self.red_flags:
                self.red_flags.append(symptom)
        for rule in check.matched_rules:
            self.rules.setdefault(rule.id, rule)

    def risk(self, factor: str) -> None:
        if factor not in self.risk_factors:
            self.risk_factors.append(factor)


def resolve_age_group(context: HealthContext) -> Optional[AgeGroup]:
    """Use the reported age group, falling back to the numeric age."""

    if context.age_group:
        return context.age_group
    if context.age_years is not None:
        return age_group_from_age(context.age_years)
    return None


def extract_patient_context(context: HealthContext) -> PatientContext:
    is_pregnant = any(
        _PREGNANCY_RE.search(item) for item in (*context.chronic_conditions, *context.risk_factors)
    )
    age_group = resolve_age_group(context)
    return PatientContext(
        is_pregnant=is_pregnant,
        is_infant=age_group == "infant",
        is_child=age_group == "child",
        is_senior=age_group == "senior",
        age_in_years=context.age_years,
    )


def severity_modifier(severity: Optional[int]) -> Tuple[int, Optional[str]]:
    if not severity:
        return 0, None
    if severity >= 9:
        return 25, "Severity rated as very high (9-10)"
    if severity >= 7:
        return 15, "Severity rated as high (7-8)"
    if severity >= 5:
        return 8, "Severity rated as moderate (5-6)"
    return 0, None


def duration_modifier(duration: Optional[str], severity: Optional[int]) -> Tuple[int, Optional[str]]:
    """Score symptom duration; the first matching branch wins."""

    high_severity = severity is not None and severity >= 7
    if duration == "just_now" and high_severity:
        return 15, "Sudden onset with high severity"
    if duration == "chronic" and high_severity:
        return 12, "Chronic condition with sudden worsening"
    if duration in ("just_now", "few_hours"):
        return 5, None
    if duration in ("1_2_weeks", "more_than_2_weeks"):
        return 8, "Symptoms persisting for an extended period"
    return 0, None


def urgency_from_score(score: int, red_flag_count: int = 0) -> UrgencyLevel:
    """Map a score to a level; any red flag floors the result at urgent."""

    if red_flag_count > 0:
        return UrgencyLevel.EMERGENCY if score >= 50 else UrgencyLevel.URGENT
    for threshold, level in _SCORE_LEVELS:
        if score >= threshold:
            return level
    return UrgencyLevel.SELF_CARE


def assess_urgency(context: HealthContext, catalog: Optional[RedFlagCatalog] = None) -> SafetyAssessment:
    """Combine red flags, demographics and symptom metadata into one verdict.

    Pure function of its inputs: missing optional fields contribute nothing.
    """

    catalog = catalog or get_catalog()
    patient = extract_patient_context(context)
    tally = _Tally()

    primary = match_symptoms(context.primary_symptom, patient, catalog)
    if primary.is_emergency:
        tally.absorb(primary)
        if primary.matched_rules:
            boost = max(rule.urgency_boost for rule in primary.matched_rules)
        else:
            boost = LEGACY_PRIMARY_BOOST
        tally.add(boost, "Primary symptom contains concerning indicators")

    for symptom in context.associated_symptoms:
        check = match_symptoms(symptom, patient, catalog)
        if check.is_emergency:
            tally.absorb(check)
            tally.add(ASSOCIATED_SYMPTOM_POINTS, f'Associated symptom "{symptom}" is concerning')

    if context.additional_notes:
        notes = match_symptoms(context.additional_notes, patient, catalog)
        if notes.is_emergency:
            tally.absorb(notes)
            tally.add(NOTES_POINTS, "Additional notes contain concerning indicators")

    age_modifier_applied = 0
    age_group = resolve_age_group(context)
    modifier = catalog.age_modifier_for(age_group)
    if modifier.score > 0:
        age_modifier_applied = modifier.score
        tally.add(modifier.score, modifier.reason)
        tally.risk(f"Age group: {age_group}")

    if patient.is_pregnant:
        tally.add(PREGNANCY_POINTS, "Pregnancy requires heightened caution with symptoms")
        tally.risk("Pregnancy")

    tally.add(*severity_modifier(context.severity))
    tally.add(*duration_modifier(context.duration, context.severity))

    if context.frequency == "constant":
        tally.add(CONSTANT_FREQUENCY_POINTS, "Symptoms are constant")

    counted = set()
    for condition in context.chronic_conditions:
        lowered = condition.lower().strip()
        if not lowered or lowered in counted or _PREGNANCY_RE.search(lowered):
            continue
        if any(high_risk in lowered for high_risk in catalog.high_risk_conditions):
            counted.add(lowered)
            tally.risk(condition)
            tally.add(HIGH_RISK_CONDITION_POINTS, f"Pre-existing condition: {condition}")

    urgency = urgency_from_score(tally.score, len(tally.red_flags))
    logger.debug(
        "Assessment score=%s urgency=%s red_flags=%s rules=%s",
        tally.score,
        urgency.value,
        len(tally.red_flags),
        ",".join(tally.rules),
    )
    return SafetyAssessment(
        urgency=urgency,
        urgency_score=tally.score,
        reasoning=tuple(tally.reasoning),
        red_flags_detected=tuple(tally.red_flags),
        risk_factors=tuple(tally.risk_factors),
        recommend_see_professional=tally.score >= PROFESSIONAL_REFERRAL_THRESHOLD,
        age_modifier_applied=age_modifier_applied,
        matched_red_flag_rules=tuple(tally.rules.values()),
        catalog_version=catalog.version,
    )
