"""Red-flag matching, urgency aggregation and crisis detection."""

from .aggregator import assess_urgency, extract_patient_context, urgency_from_score
from .catalog import CatalogError, age_group_from_age, get_catalog, load_catalog, reload_catalog
from .crisis import crisis_type_for, detect_crisis_type, format_crisis_response
from .guidance import build_guidance_gate
from .matcher import detect_emergency, match_symptoms

__all__ = [
    "CatalogError",
    "age_group_from_age",
    "assess_urgency",
    "build_guidance_gate",
    "crisis_type_for",
    "detect_crisis_type",
    "detect_emergency",
    "extract_patient_context",
    "format_crisis_response",
    "get_catalog",
    "load_catalog",
    "match_symptoms",
    "reload_catalog",
    "urgency_from_score",
]
