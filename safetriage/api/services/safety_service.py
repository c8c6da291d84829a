"""Orchestration of assessments for the HTTP layer."""
from __future__ import annotations

import logging
from typing import List, Optional

from ...core.aggregator import assess_urgency
from ...core.catalog import RedFlagCatalog
from ...core.crisis import crisis_type_for, detect_crisis_type, format_crisis_response
from ...core.guidance import build_guidance_gate
from ...core.matcher import match_symptoms
from ...core.symptom_context import analyze_symptom_context
from ...schemas.safety import EmergencyCheckResult, HealthContext, RedFlagCategory
from ..schemas.safety import (
    AssessmentResponse,
    CatalogSummary,
    CrisisRequest,
    CrisisResponse,
    MatchRequest,
    RuleSummary,
)

logger = logging.getLogger(__name__)


class SafetyService:
    """Assess patient reports and describe the rule catalog."""

    def assess(self, catalog: RedFlagCatalog, context: HealthContext) -> AssessmentResponse:
        assessment = assess_urgency(context, catalog)
        crisis_type = crisis_type_for(context)
        if crisis_type != "none":
            logger.warning("Crisis disclosure detected (%s); resources attached", crisis_type)
        logger.info(
            "Assessment completed: urgency=%s score=%s red_flags=%s",
            assessment.urgency.value,
            assessment.urgency_score,
            len(assessment.red_flags_detected),
        )
        return AssessmentResponse(
            assessment=assessment,
            crisis_type=crisis_type,
            guidance=build_guidance_gate(assessment, crisis_type),
            symptom_context=analyze_symptom_context(context.primary_symptom, context.associated_symptoms),
        )

    def match(self, catalog: RedFlagCatalog, request: MatchRequest) -> EmergencyCheckResult:
        return match_symptoms(request.text, request.context, catalog)

    def crisis(self, request: CrisisRequest) -> CrisisResponse:
        crisis_type = detect_crisis_type(request.text)
        return CrisisResponse(
            crisis_type=crisis_type,
            response=format_crisis_response(crisis_type, request.include_immediate_danger),
        )

    def describe_catalog(
        self,
        catalog: RedFlagCatalog,
        category: Optional[RedFlagCategory] = None,
    ) -> CatalogSummary:
        rules = catalog.by_category(category) if category else catalog.rules
        summaries: List[RuleSummary] = [
            RuleSummary(
                id=rule.id,
                category=rule.category,
                urgency_boost=rule.urgency_boost,
                pattern=rule.pattern.pattern,
                requires_context=sorted(rule.requires_context),
                age_restriction=rule.age_restriction,
                immediate_action=rule.immediate_action,
                description=rule.description,
            )
            for rule in rules
        ]
        return CatalogSummary(version=catalog.version, rule_count=len(summaries), rules=summaries)


safety_service = SafetyService()
