"""API endpoints for safety assessment."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...schemas.safety import EmergencyCheckResult, RedFlagCategory
from ..deps import get_active_catalog
from ..schemas.safety import (
    AssessRequest,
    AssessmentResponse,
    CatalogSummary,
    CrisisRequest,
    CrisisResponse,
    MatchRequest,
)
from ..services.safety_service import safety_service

router = APIRouter(prefix="/api/safety", tags=["safety"])


@router.post("/assess", response_model=AssessmentResponse)
def assess(payload: AssessRequest, catalog=Depends(get_active_catalog)) -> AssessmentResponse:
    return safety_service.assess(catalog, payload)


@router.post("/match", response_model=EmergencyCheckResult)
def match(payload: MatchRequest, catalog=Depends(get_active_catalog)) -> EmergencyCheckResult:
    return safety_service.match(catalog, payload)


@router.post("/crisis", response_model=CrisisResponse)
def crisis(payload: CrisisRequest) -> CrisisResponse:
    return safety_service.crisis(payload)


@router.get("/rules", response_model=CatalogSummary)
def list_rules(
    category: Optional[RedFlagCategory] = Query(default=None),
    catalog=Depends(get_active_catalog),
) -> CatalogSummary:
    return safety_service.describe_catalog(catalog, category)
