from __future__ import annotations

import json
from pathlib import Path

from safetriage.core.aggregator import assess_urgency
from safetriage.core.guidance import build_guidance_gate
from safetriage.schemas.safety import HealthContext, UrgencyLevel


GOLD_PATH = Path(__file__).resolve().parent / "gold" / "red_flag_cases.json"


def test_gold_red_flags_are_never_under_triaged():
    cases = json.loads(GOLD_PATH.read_text(encoding="utf-8"))
    for case in cases:
        assessment = assess_urgency(HealthContext(**case["context"]))
        assert assessment.urgency >= UrgencyLevel(case["min_urgency"]), case["context"]["primary_symptom"]
        assert assessment.red_flags_detected
        assert assessment.recommend_see_professional is True


def test_gold_red_flags_withhold_home_remedies():
    cases = json.loads(GOLD_PATH.read_text(encoding="utf-8"))
    for case in cases:
        gate = build_guidance_gate(assess_urgency(HealthContext(**case["context"])))
        assert gate.suppress_home_remedies is True
        assert gate.immediate_actions
