"""Schemas for red-flag rules, patient context and safety assessments."""

from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .common import StrictModel

RedFlagCategory = Literal[
    "cardiac",
    "respiratory",
    "neurological",
    "bleeding",
    "mental_health",
    "allergic",
    "trauma",
    "pediatric",
    "pregnancy",
    "infection",
    "dehydration",
]
ContextTag = Literal["pregnancy", "infant", "child", "senior"]
AgeGroup = Literal["infant", "child", "teen", "adult", "senior"]
Duration = Literal[
    "just_now",
    "few_hours",
    "today",
    "1_2_days",
    "3_7_days",
    "1_2_weeks",
    "more_than_2_weeks",
    "chronic",
]
Frequency = Literal["constant", "intermittent", "occasional", "first_time"]
CrisisType = Literal["suicide", "self_harm", "overdose", "none"]


class UrgencyLevel(str, Enum):
    """Triage levels, declared from least to most urgent."""

    SELF_CARE = "self_care"
    MONITOR = "monitor"
    NON_URGENT = "non_urgent"
    SOON = "soon"
    URGENT = "urgent"
    EMERGENCY = "emergency"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UrgencyLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, UrgencyLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, UrgencyLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, UrgencyLevel):
            return NotImplemented
        return self.rank >= other.rank


class AgeRestriction(StrictModel):
    """Inclusive age window, expressed in years."""

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> "AgeRestriction":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("age_restriction min must not exceed max")
        return self

    def contains(self, age_in_years: float) -> bool:
        if self.min is not None and age_in_years < self.min:
            return False
        if self.max is not None and age_in_years > self.max:
            return False
        return True


class RedFlagRule(StrictModel):
    id: str = Field(min_length=1)
    pattern: re.Pattern[str]
    category: RedFlagCategory
    urgency_boost: int = Field(ge=1, le=100)
    age_restriction: Optional[AgeRestriction] = None
    requires_context: FrozenSet[ContextTag] = frozenset()
    immediate_action: str
    description: str

    @field_validator("pattern", mode="before")
    @classmethod
    def _compile(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return re.compile(value, re.IGNORECASE)
            except re.error as exc:
                raise ValueError(f"invalid pattern: {exc}") from exc
        return value

    @field_serializer("pattern")
    def _dump_pattern(self, value: re.Pattern[str]) -> str:
        return value.pattern

    @field_serializer("requires_context")
    def _dump_context(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)

    @property
    def is_universal(self) -> bool:
        return not self.requires_context


class AgeModifier(StrictModel):
    score: int = Field(default=0, ge=0)
    reason: str = ""


class PatientContext(StrictModel):
    """Demographic flags derived once per assessment."""

    is_pregnant: bool = False
    is_infant: bool = False
    is_child: bool = False
    is_senior: bool = False
    age_in_years: Optional[float] = Field(default=None, ge=0)

    @property
    def tags(self) -> FrozenSet[str]:
        """Context tags this patient satisfies.

        Infants also satisfy ``child``, so rules written for children apply
        to them as well.
        """

        active = set()
        if self.is_pregnant:
            active.add("pregnancy")
        if self.is_infant:
            active.update(("infant", "child"))
        if self.is_child:
            active.add("child")
        if self.is_senior:
            active.add("senior")
        return frozenset(active)


class HealthContext(BaseModel):
    """Patient-reported fields collected by the conversation layer."""

    model_config = ConfigDict(frozen=True)

    primary_symptom: str = ""
    associated_symptoms: Tuple[str, ...] = ()
    additional_notes: Optional[str] = None
    severity: Optional[int] = Field(default=None, ge=1, le=10)
    duration: Optional[Duration] = None
    frequency: Optional[Frequency] = None
    chronic_conditions: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    age_group: Optional[AgeGroup] = None
    age_years: Optional[float] = Field(default=None, ge=0, le=130)
    recent_events: Tuple[str, ...] = ()
    medications: Tuple[str, ...] = ()
    allergies: Tuple[str, ...] = ()


class EmergencyCheckResult(StrictModel):
    is_emergency: bool
    detected_symptoms: Tuple[str, ...] = ()
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    matched_rules: Tuple[RedFlagRule, ...] = ()


class SafetyAssessment(StrictModel):
    urgency: UrgencyLevel
    urgency_score: int
    reasoning: Tuple[str, ...] = ()
    red_flags_detected: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    recommend_see_professional: bool
    age_modifier_applied: int = 0
    matched_red_flag_rules: Tuple[RedFlagRule, ...] = ()
    catalog_version: str = ""
