from __future__ import annotations

import pytest

from safetriage.core import catalog as catalog_module
from safetriage.core.catalog import CatalogError, age_group_from_age, get_catalog, load_catalog, reload_catalog
from safetriage.schemas.safety import AgeModifier

RULE_YAML = """
meta:
  version: "{version}"
rules:
  - id: test_rule
    pattern: 'chest\\s*pain'
    category: cardiac
    urgency_boost: 50
    immediate_action: Call emergency services
    description: Chest pain
{extra}
"""


def write_catalog(tmp_path, version="9.0.0", extra=""):
    path = tmp_path / "catalog.yml"
    path.write_text(RULE_YAML.format(version=version, extra=extra), encoding="utf-8")
    return path


def test_packaged_catalog_loads():
    catalog = load_catalog()
    assert catalog.version == "2.1.0"
    assert len(catalog.rules) == 48
    assert "chest pain" in catalog.legacy_keywords
    assert "diabetes" in catalog.high_risk_conditions


def test_rule_lookup_and_category_filter():
    catalog = load_catalog()
    rule = catalog.rule("peds_infant_fever_any")
    assert rule is not None
    assert rule.requires_context == frozenset({"infant"})
    assert rule.age_restriction is not None and rule.age_restriction.max == 0.25
    assert catalog.rule("does_not_exist") is None
    pregnancy = catalog.by_category("pregnancy")
    assert pregnancy and all(r.requires_context == frozenset({"pregnancy"}) for r in pregnancy)


def test_patterns_are_case_insensitive():
    rule = load_catalog().rule("cardiac_chest_pain")
    assert rule.pattern.search("CHEST PAIN")


def test_duplicate_rule_id_is_rejected(tmp_path):
    extra = """
  - id: test_rule
    pattern: 'other'
    category: cardiac
    urgency_boost: 10
    immediate_action: x
    description: y
"""
    path = write_catalog(tmp_path, extra=extra)
    with pytest.raises(CatalogError) as exc_info:
        load_catalog(path)
    assert "duplicate rule id" in str(exc_info.value)


def test_invalid_pattern_is_rejected(tmp_path):
    extra = """
  - id: broken
    pattern: '(unclosed'
    category: cardiac
    urgency_boost: 10
    immediate_action: x
    description: y
"""
    with pytest.raises(CatalogError):
        load_catalog(write_catalog(tmp_path, extra=extra))


def test_unknown_category_is_rejected(tmp_path):
    extra = """
  - id: odd
    pattern: 'odd'
    category: dermatology
    urgency_boost: 10
    immediate_action: x
    description: y
"""
    with pytest.raises(CatalogError):
        load_catalog(write_catalog(tmp_path, extra=extra))


def test_missing_file_raises_catalog_error(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.yml")


def test_reload_swaps_active_catalog(tmp_path, monkeypatch):
    monkeypatch.setattr(catalog_module, "_active", None)
    original = get_catalog()
    assert original.version == "2.1.0"

    replacement = reload_catalog(write_catalog(tmp_path, version="3.0.0"))
    assert get_catalog() is replacement
    assert replacement.version == "3.0.0"
    # Holders of the previous catalog keep a consistent rule set.
    assert len(original.rules) == 48


@pytest.mark.parametrize(
    ("age", "group"),
    [
        (0, "infant"),
        (0.99, "infant"),
        (1, "child"),
        (12.9, "child"),
        (13, "teen"),
        (17, "teen"),
        (18, "adult"),
        (64, "adult"),
        (65, "senior"),
        (90, "senior"),
    ],
)
def test_age_group_from_age(age, group):
    assert age_group_from_age(age) == group


def test_negative_age_is_rejected():
    with pytest.raises(ValueError):
        age_group_from_age(-1)


def test_age_modifiers():
    catalog = load_catalog()
    assert catalog.age_modifier_for("infant").score == 15
    assert catalog.age_modifier_for("child").score == 8
    assert catalog.age_modifier_for("teen").score == 0
    assert catalog.age_modifier_for("adult").score == 0
    assert catalog.age_modifier_for("senior").score == 12
    assert catalog.age_modifier_for(None).score == 0


def test_age_modifiers_are_read_only():
    catalog = load_catalog()
    with pytest.raises(TypeError):
        catalog.age_modifiers["adult"] = AgeModifier(score=40)
    assert catalog.age_modifier_for("adult").score == 0
    assert catalog.model_dump()["age_modifiers"]["senior"]["score"] == 12
