"""Gate downstream guidance on the outcome of a safety assessment."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..schemas.guidance import CareAction, GuidanceGate, RiskLevel, UrgencyMessage
from ..schemas.safety import CrisisType, SafetyAssessment, UrgencyLevel
from .crisis import format_crisis_response

__all__ = ["DISCLAIMER", "build_guidance_gate", "care_actions_for", "risk_level_for", "urgency_message_for"]

DISCLAIMER = (
    "Important: This guidance is for informational purposes only and is not a medical diagnosis. "
    "It does not replace professional medical advice, diagnosis, or treatment. Always seek the advice "
    "of a qualified healthcare provider with any questions you may have regarding a medical condition. "
    "If you think you may have a medical emergency, call your doctor, go to the emergency department, "
    "or call 911 immediately."
)

_URGENCY_MESSAGES: Dict[UrgencyLevel, UrgencyMessage] = {
    UrgencyLevel.EMERGENCY: UrgencyMessage(
        title="Seek Emergency Care",
        message=(
            "Your symptoms require immediate medical attention. "
            "Please call 911 or go to the nearest emergency room."
        ),
        action_label="Call Emergency Services",
    ),
    UrgencyLevel.URGENT: UrgencyMessage(
        title="See a Doctor Today",
        message="Your symptoms should be evaluated by a healthcare provider today.",
        action_label="Find Urgent Care",
    ),
    UrgencyLevel.SOON: UrgencyMessage(
        title="Schedule an Appointment",
        message="We recommend seeing a healthcare provider within the next 1-2 days.",
        action_label="Book Appointment",
    ),
    UrgencyLevel.NON_URGENT: UrgencyMessage(
        title="Consider a Check-up",
        message="While not urgent, a healthcare visit may be helpful when convenient.",
        action_label="Schedule When Ready",
    ),
    UrgencyLevel.MONITOR: UrgencyMessage(
        title="Monitor Your Symptoms",
        message="Keep track of your symptoms and watch for any changes.",
        action_label="Track Symptoms",
    ),
    UrgencyLevel.SELF_CARE: UrgencyMessage(
        title="Self-Care Recommended",
        message="Your symptoms can likely be managed at home with proper care.",
        action_label="View Self-Care Tips",
    ),
}

_VIDEO_CONSULT = "video-consultation"
_HOME_VISIT = "doctor-home-visit"


def risk_level_for(urgency: UrgencyLevel) -> RiskLevel:
    if urgency == UrgencyLevel.EMERGENCY:
        return "critical"
    if urgency == UrgencyLevel.URGENT:
        return "high"
    if urgency in (UrgencyLevel.SOON, UrgencyLevel.NON_URGENT):
        return "moderate"
    return "low"


def urgency_message_for(urgency: UrgencyLevel) -> UrgencyMessage:
    return _URGENCY_MESSAGES[urgency]


def care_actions_for(urgency: UrgencyLevel) -> Tuple[CareAction, ...]:
    """Care-pathway suggestions keyed by triage level."""

    if urgency == UrgencyLevel.EMERGENCY:
        return (
            CareAction(
                type="call_emergency",
                label="Call Emergency Services",
                description="Call 911 for immediate medical attention",
                urgency=UrgencyLevel.EMERGENCY,
            ),
        )
    if urgency == UrgencyLevel.URGENT:
        return (
            CareAction(
                type="book_doctor",
                label="See Doctor Today",
                description="Book an urgent doctor visit",
                urgency=UrgencyLevel.URGENT,
                service_id=_HOME_VISIT,
            ),
            CareAction(
                type="video_consult",
                label="Video Consultation",
                description="Speak with a doctor online now",
                urgency=UrgencyLevel.URGENT,
                service_id=_VIDEO_CONSULT,
            ),
        )
    if urgency == UrgencyLevel.SOON:
        return (
            CareAction(
                type="book_doctor",
                label="Book Doctor Visit",
                description="Schedule within 1-2 days",
                urgency=UrgencyLevel.SOON,
                service_id=_HOME_VISIT,
            ),
            CareAction(
                type="video_consult",
                label="Video Consultation",
                description="Talk to a doctor online",
                urgency=UrgencyLevel.SOON,
                service_id=_VIDEO_CONSULT,
            ),
        )
    if urgency == UrgencyLevel.NON_URGENT:
        return (
            CareAction(
                type="video_consult",
                label="Consult a Doctor",
                description="Get professional advice",
                urgency=UrgencyLevel.NON_URGENT,
                service_id=_VIDEO_CONSULT,
            ),
            CareAction(
                type="monitor_at_home",
                label="Monitor at Home",
                description="Track your symptoms",
                urgency=UrgencyLevel.NON_URGENT,
            ),
        )
    return (
        CareAction(
            type="monitor_at_home",
            label="Monitor at Home",
            description="Continue self-care and track symptoms",
            urgency=urgency,
        ),
        CareAction(
            type="no_action_needed",
            label="No Action Needed Now",
            description="Revisit if symptoms change",
            urgency=urgency,
        ),
    )


def build_guidance_gate(assessment: SafetyAssessment, crisis_type: CrisisType = "none") -> GuidanceGate:
    """Decide which guidance sections may be shown for *assessment*.

    Home remedies and OTC suggestions are withheld from urgent cases upward.
    A crisis always raises the emergency banner and carries the resource text.
    """

    urgency = assessment.urgency
    withhold_self_treatment = urgency >= UrgencyLevel.URGENT
    immediate_actions: List[str] = []
    for rule in assessment.matched_red_flag_rules:
        if rule.immediate_action not in immediate_actions:
            immediate_actions.append(rule.immediate_action)

    return GuidanceGate(
        urgency=urgency,
        risk_level=risk_level_for(urgency),
        show_emergency_banner=urgency == UrgencyLevel.EMERGENCY or crisis_type != "none",
        suppress_home_remedies=withhold_self_treatment,
        suppress_otc=withhold_self_treatment,
        crisis_type=crisis_type,
        crisis_resources=format_crisis_response(crisis_type, include_immediate_danger=True),
        immediate_actions=tuple(immediate_actions),
        urgency_message=urgency_message_for(urgency),
        care_actions=care_actions_for(urgency),
        disclaimer=DISCLAIMER,
    )
