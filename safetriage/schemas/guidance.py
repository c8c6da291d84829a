"""Schemas describing what downstream guidance may show for an assessment."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from .common import StrictModel
from .safety import CrisisType, UrgencyLevel

RiskLevel = Literal["low", "moderate", "high", "critical"]
CareActionType = Literal[
    "call_emergency",
    "book_doctor",
    "video_consult",
    "monitor_at_home",
    "no_action_needed",
]


class CareAction(StrictModel):
    type: CareActionType
    label: str
    description: str
    urgency: UrgencyLevel
    service_id: Optional[str] = None


class UrgencyMessage(StrictModel):
    title: str
    message: str
    action_label: str


class GuidanceGate(StrictModel):
    urgency: UrgencyLevel
    risk_level: RiskLevel
    show_emergency_banner: bool
    suppress_home_remedies: bool
    suppress_otc: bool
    crisis_type: CrisisType = "none"
    crisis_resources: str = ""
    immediate_actions: Tuple[str, ...] = ()
    urgency_message: UrgencyMessage
    care_actions: Tuple[CareAction, ...] = ()
    disclaimer: str


class SymptomContextAnalysis(StrictModel):
    possible_categories: Tuple[str, ...] = ()
    severity_indicators: Tuple[str, ...] = ()
    suggested_questions: Tuple[str, ...] = ()
