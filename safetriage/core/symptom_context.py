"""Lightweight body-system hints for follow-up questioning."""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from ..schemas.guidance import SymptomContextAnalysis
from .normalizer.text import normalize_text

__all__ = ["analyze_symptom_context"]

_CATEGORY_HINTS: Tuple[Tuple[str, re.Pattern[str], str], ...] = (
    (
        "neurological",
        re.compile(r"head|migraine|dizzy|vertigo"),
        "Do you have any vision changes or light sensitivity?",
    ),
    (
        "gastrointestinal",
        re.compile(r"stomach|nausea|vomit|diarrhea|abdomen|belly"),
        "Have you noticed any changes in your appetite?",
    ),
    (
        "respiratory/infectious",
        re.compile(r"cough|cold|flu|fever|throat|sinus"),
        "Have you been around anyone who was sick recently?",
    ),
    (
        "dermatological",
        re.compile(r"skin|rash|itch|bump|swelling"),
        "Has the affected area changed in size or appearance?",
    ),
    (
        "musculoskeletal",
        re.compile(r"joint|muscle|back|knee|shoulder|pain"),
        "Did this start after any physical activity or injury?",
    ),
)

SEVERITY_WORDS = (
    "severe",
    "intense",
    "unbearable",
    "worst",
    "extreme",
    "terrible",
    "excruciating",
    "sharp",
    "stabbing",
)


def analyze_symptom_context(primary_symptom: str, associated_symptoms: Iterable[str] = ()) -> SymptomContextAnalysis:
    text = normalize_text(" ".join([primary_symptom, *associated_symptoms]))
    categories = []
    questions = []
    for category, pattern, question in _CATEGORY_HINTS:
        if pattern.search(text):
            categories.append(category)
            questions.append(question)
    indicators = [word for word in SEVERITY_WORDS if word in text]
    return SymptomContextAnalysis(
        possible_categories=tuple(categories),
        severity_indicators=tuple(indicators),
        suggested_questions=tuple(questions),
    )
