"""Pydantic schemas for the safety endpoints."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...schemas.guidance import GuidanceGate, SymptomContextAnalysis
from ...schemas.safety import (
    AgeRestriction,
    CrisisType,
    HealthContext,
    PatientContext,
    RedFlagCategory,
    SafetyAssessment,
)


class AssessRequest(HealthContext):
    """Assessment body; unknown keys and a blank primary symptom are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_symptom: str = Field(..., min_length=1)

    @field_validator("primary_symptom")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("primary_symptom must not be blank")
        return value


class MatchRequest(BaseModel):
    text: str = Field(..., min_length=1)
    context: PatientContext = Field(default_factory=PatientContext)


class CrisisRequest(BaseModel):
    text: str = Field(..., min_length=1)
    include_immediate_danger: bool = False


class CrisisResponse(BaseModel):
    crisis_type: CrisisType
    response: str


class AssessmentResponse(BaseModel):
    assessment: SafetyAssessment
    crisis_type: CrisisType
    guidance: GuidanceGate
    symptom_context: SymptomContextAnalysis


class RuleSummary(BaseModel):
    id: str
    category: RedFlagCategory
    urgency_boost: int
    pattern: str
    requires_context: List[str] = []
    age_restriction: Optional[AgeRestriction] = None
    immediate_action: str
    description: str


class CatalogSummary(BaseModel):
    version: str
    rule_count: int
    rules: List[RuleSummary]
