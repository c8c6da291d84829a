"""Red-flag rule catalog: loading, validation and age helpers.

The catalog is data (``content/red_flags.yml``). It is validated once, frozen,
and shared by every assessment in the process. Adding clinical coverage means
appending a rule with a fresh ``id`` to the YAML file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import Field, ValidationError, field_serializer, field_validator, model_validator

from ..content import load_catalog_data
from ..schemas.common import StrictModel
from ..schemas.safety import AgeGroup, AgeModifier, RedFlagCategory, RedFlagRule

__all__ = [
    "CatalogError",
    "RedFlagCatalog",
    "age_group_from_age",
    "age_modifier_for",
    "get_catalog",
    "load_catalog",
    "reload_catalog",
]

logger = logging.getLogger(__name__)


@dataclass
class CatalogError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover - dataclass default
        return self.message


class RedFlagCatalog(StrictModel):
    version: str
    rules: Tuple[RedFlagRule, ...]
    legacy_keywords: Tuple[str, ...] = ()
    high_risk_conditions: Tuple[str, ...] = ()
    age_modifiers: Mapping[AgeGroup, AgeModifier] = Field(default_factory=dict, validate_default=True)

    @field_validator("age_modifiers", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, AgeModifier]) -> Mapping[str, AgeModifier]:
        return MappingProxyType(dict(value))

    @field_serializer("age_modifiers")
    def _dump_modifiers(self, value: Mapping[str, AgeModifier]) -> Dict[str, AgeModifier]:
        return dict(value)

    @model_validator(mode="after")
    def _unique_ids(self) -> "RedFlagCatalog":
        seen = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"duplicate rule id '{rule.id}'")
            seen.add(rule.id)
        return self

    def rule(self, rule_id: str) -> Optional[RedFlagRule]:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def by_category(self, category: RedFlagCategory) -> Tuple[RedFlagRule, ...]:
        return tuple(rule for rule in self.rules if rule.category == category)

    def age_modifier_for(self, age_group: Optional[str]) -> AgeModifier:
        if not age_group:
            return AgeModifier()
        return self.age_modifiers.get(age_group, AgeModifier())


def _build(raw: Dict[str, Any]) -> RedFlagCatalog:
    meta = raw.get("meta", {}) or {}
    try:
        return RedFlagCatalog.model_validate(
            {
                "version": str(meta.get("version", "0")),
                "rules": raw.get("rules", []) or [],
                "legacy_keywords": [str(k).lower() for k in raw.get("legacy_keywords", []) or []],
                "high_risk_conditions": [str(c).lower() for c in raw.get("high_risk_conditions", []) or []],
                "age_modifiers": raw.get("age_modifiers", {}) or {},
            }
        )
    except ValidationError as exc:
        raise CatalogError(f"Invalid red-flag catalog: {exc}") from exc


def load_catalog(path: str | Path | None = None) -> RedFlagCatalog:
    """Load and validate a catalog from *path*, or the packaged default."""

    try:
        raw = load_catalog_data(path)
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Cannot read red-flag catalog at {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise CatalogError("Red-flag catalog must be a mapping")
    catalog = _build(raw)
    logger.info("Loaded red-flag catalog v%s with %s rules", catalog.version, len(catalog.rules))
    return catalog


_active: Optional[RedFlagCatalog] = None


def get_catalog() -> RedFlagCatalog:
    """Return the process-wide catalog, loading the packaged one on first use."""

    global _active
    if _active is None:
        _active = load_catalog()
    return _active


def reload_catalog(path: str | Path | None = None) -> RedFlagCatalog:
    """Swap in a freshly loaded catalog.

    The previous catalog object is left untouched, so assessments already
    holding a reference keep a consistent rule set.
    """

    global _active
    catalog = load_catalog(path)
    previous = _active.version if _active is not None else None
    _active = catalog
    if previous is not None and previous != catalog.version:
        logger.info("Red-flag catalog replaced: v%s -> v%s", previous, catalog.version)
    return catalog


def age_group_from_age(age: float) -> AgeGroup:
    """Bucket an age in years into its age group."""

    if age < 0:
        raise ValueError("age must be >= 0")
    if age < 1:
        return "infant"
    if age < 13:
        return "child"
    if age < 18:
        return "teen"
    if age < 65:
        return "adult"
    return "senior"


def age_modifier_for(age_group: Optional[str], catalog: Optional[RedFlagCatalog] = None) -> AgeModifier:
    return (catalog or get_catalog()).age_modifier_for(age_group)
