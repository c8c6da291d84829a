from __future__ import annotations

from safetriage.core.aggregator import assess_urgency
from safetriage.core.catalog import load_catalog
from safetriage.core.guidance import DISCLAIMER, build_guidance_gate, care_actions_for, risk_level_for
from safetriage.core.symptom_context import analyze_symptom_context
from safetriage.schemas.safety import HealthContext, UrgencyLevel

CATALOG = load_catalog()


def gate_for(crisis_type="none", **fields):
    assessment = assess_urgency(HealthContext(**fields), CATALOG)
    return build_guidance_gate(assessment, crisis_type)


def test_emergency_suppresses_self_treatment():
    gate = gate_for(primary_symptom="my throat is closing")
    assert gate.urgency == UrgencyLevel.EMERGENCY
    assert gate.risk_level == "critical"
    assert gate.show_emergency_banner is True
    assert gate.suppress_home_remedies is True
    assert gate.suppress_otc is True
    assert gate.immediate_actions == ("Use epinephrine if available, call emergency services",)
    assert [action.type for action in gate.care_actions] == ["call_emergency"]
    assert gate.disclaimer == DISCLAIMER


def test_urgent_suppresses_without_banner():
    gate = gate_for(primary_symptom="tired", associated_symptoms=("I fainted",))
    assert gate.urgency == UrgencyLevel.URGENT
    assert gate.suppress_home_remedies is True
    assert gate.show_emergency_banner is False
    assert gate.urgency_message.title == "See a Doctor Today"


def test_low_urgency_allows_self_treatment():
    gate = gate_for(primary_symptom="runny nose", severity=2)
    assert gate.urgency == UrgencyLevel.SELF_CARE
    assert gate.suppress_home_remedies is False
    assert gate.suppress_otc is False
    assert gate.show_emergency_banner is False
    assert gate.crisis_resources == ""
    assert gate.immediate_actions == ()


def test_crisis_raises_banner_and_resources():
    gate = gate_for("self_harm", primary_symptom="I have been cutting myself")
    assert gate.show_emergency_banner is True
    assert gate.crisis_type == "self_harm"
    assert "988" in gate.crisis_resources
    assert "911" in gate.crisis_resources


def test_immediate_actions_are_deduplicated():
    gate = gate_for(primary_symptom="chest pain and heart racing")
    assert gate.immediate_actions == ("Call emergency services immediately",)


def test_risk_levels_and_care_actions():
    assert risk_level_for(UrgencyLevel.SOON) == "moderate"
    assert risk_level_for(UrgencyLevel.MONITOR) == "low"
    urgent = care_actions_for(UrgencyLevel.URGENT)
    assert {action.service_id for action in urgent} == {"doctor-home-visit", "video-consultation"}


def test_symptom_context_hints():
    analysis = analyze_symptom_context("severe headache", ["nausea", "sharp back pain"])
    assert analysis.possible_categories == ("neurological", "gastrointestinal", "musculoskeletal")
    assert analysis.severity_indicators == ("severe", "sharp")
    assert len(analysis.suggested_questions) == 3


def test_symptom_context_empty():
    analysis = analyze_symptom_context("")
    assert analysis.possible_categories == ()
    assert analysis.severity_indicators == ()


def test_monitor_care_actions_keep_their_level():
    actions = care_actions_for(UrgencyLevel.MONITOR)
    assert [action.type for action in actions] == ["monitor_at_home", "no_action_needed"]
    assert all(action.urgency == UrgencyLevel.MONITOR for action in actions)
    assert all(action.urgency == UrgencyLevel.SELF_CARE for action in care_actions_for(UrgencyLevel.SELF_CARE))
