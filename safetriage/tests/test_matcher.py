from __future__ import annotations

import pytest

from safetriage.core.catalog import load_catalog
from safetriage.core.matcher import detect_emergency, match_symptoms, rule_applies
from safetriage.core.normalizer.text import normalize_text
from safetriage.schemas.safety import PatientContext

CATALOG = load_catalog()


def rule_ids(result):
    return {rule.id for rule in result.matched_rules}


def test_infant_fever_rule_never_fires_without_context():
    result = detect_emergency("my baby has a fever", CATALOG)
    assert "peds_infant_fever_any" not in rule_ids(result)
    assert result.is_emergency is False
    assert result.confidence == 0.0


def test_infant_fever_rule_respects_age_restriction():
    young = PatientContext(is_infant=True, age_in_years=0.1)
    older = PatientContext(is_infant=True, age_in_years=0.5)
    unknown_age = PatientContext(is_infant=True)

    assert "peds_infant_fever_any" in rule_ids(match_symptoms("she feels hot", young, CATALOG))
    assert "peds_infant_fever_any" not in rule_ids(match_symptoms("she feels hot", older, CATALOG))
    assert "peds_infant_fever_any" in rule_ids(match_symptoms("she feels hot", unknown_age, CATALOG))


def test_infant_satisfies_child_rules():
    infant = PatientContext(is_infant=True)
    assert "peds_lethargy" in rule_ids(match_symptoms("he is very floppy", infant, CATALOG))


def test_child_does_not_satisfy_infant_only_rules():
    child = PatientContext(is_child=True, age_in_years=6)
    result = match_symptoms("high fever since last night", child, CATALOG)
    assert "peds_infant_fever_high" in rule_ids(result)
    assert "peds_infant_fever_any" not in rule_ids(result)


def test_pregnancy_rules_require_pregnancy():
    text = "some vaginal bleeding this morning"
    assert "preg_vaginal_bleeding" not in rule_ids(detect_emergency(text, CATALOG))
    pregnant = PatientContext(is_pregnant=True)
    result = match_symptoms(text, pregnant, CATALOG)
    assert "preg_vaginal_bleeding" in rule_ids(result)
    assert "Vaginal bleeding in pregnancy" in result.detected_symptoms


def test_all_matching_rules_are_reported():
    result = detect_emergency("Chest pain and I can't breathe", CATALOG)
    assert {"cardiac_chest_pain", "respiratory_cant_breathe"} <= rule_ids(result)
    assert result.detected_symptoms[:2] == ("chest pain", "can't breathe")
    assert result.is_emergency is True
    assert result.confidence == 1.0


def test_confidence_single_rule():
    result = detect_emergency("I keep coughing up blood", CATALOG)
    assert rule_ids(result) == {"bleeding_coughing_blood"}
    assert result.confidence == pytest.approx(0.5 + 0.15 + (45 / 50) * 0.3)


def test_confidence_legacy_keyword_only():
    result = detect_emergency("I think I'm having a stroke", CATALOG)
    assert result.matched_rules == ()
    assert result.detected_symptoms == ("stroke",)
    assert result.confidence == pytest.approx(0.8)


def test_empty_text_is_not_an_emergency():
    assert detect_emergency("", CATALOG).is_emergency is False
    assert detect_emergency("   ", CATALOG).is_emergency is False


def test_curly_apostrophes_are_normalized():
    assert normalize_text("  Can’t   BREATHE ") == "can't breathe"
    assert "respiratory_cant_breathe" in rule_ids(detect_emergency("I can’t breathe", CATALOG))


def test_rule_applies_without_age_enforces_context_only():
    rule = CATALOG.rule("senior_fall")
    assert rule_applies(rule, PatientContext(is_senior=True)) is True
    assert rule_applies(rule, PatientContext()) is False
    assert CATALOG.rule("cardiac_chest_pain").is_universal


def test_throat_closing_phrasings():
    for text in ("my throat is closing", "throat feels tight", "throat swelling", "a swollen throat"):
        assert "allergic_throat" in rule_ids(detect_emergency(text, CATALOG)), text
