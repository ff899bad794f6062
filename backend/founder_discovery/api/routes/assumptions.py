"""Assumptions: CRUD, explicit status changes, evidence and validation suggestions.

Invariants:
    - Status changes only through POST .../status or POST .../accept-suggestion
    - GET .../eligibility never changes state; it only reports a suggestion
    - GET ... ?stage=N returns the stage's assumptions, open work and highest risk first
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from founder_discovery.api.dependencies import get_discovery_service
from founder_discovery.core.domain_types import ValidationStage
from founder_discovery.core.validation_eligibility import validation_suggestion_message
from founder_discovery.schemas.assumption import (
    AssumptionCreate,
    AssumptionCreated,
    AssumptionResponse,
    AssumptionUpdate,
    EligibilityResponse,
    EvidenceCreate,
    EvidenceSummaryResponse,
    StatusChange,
)
from founder_discovery.services.discovery_service import DiscoveryService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/projects/{project_id}/assumptions", tags=["assumptions"],
)


@router.post(
    "", response_model=AssumptionCreated, status_code=status.HTTP_201_CREATED,
)
async def create_assumption(
    project_id: UUID,
    body: AssumptionCreate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    assumption, warning = await service.create_assumption(
        str(project_id),
        body.type,
        body.description,
        body.canvas_area,
        confidence=body.confidence,
        importance=body.importance,
        validation_stage=body.validation_stage,
    )
    response = AssumptionCreated.model_validate(assumption)
    if warning:
        response.warning = warning["message"]
    return response


@router.get("", response_model=list[AssumptionResponse])
async def list_assumptions(
    project_id: UUID,
    stage: int | None = Query(None, ge=1, le=3),
    service: DiscoveryService = Depends(get_discovery_service),
):
    return await service.list_assumptions(
        str(project_id), ValidationStage(stage) if stage is not None else None,
    )


@router.get("/{assumption_id}", response_model=AssumptionResponse)
async def get_assumption(
    project_id: UUID,
    assumption_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    return await service.get_assumption(str(project_id), str(assumption_id))


@router.patch("/{assumption_id}", response_model=AssumptionResponse)
async def update_assumption(
    project_id: UUID,
    assumption_id: UUID,
    body: AssumptionUpdate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    """Edit text or ratings. Risk score and priority are recomputed."""
    return await service.update_assumption(
        str(project_id),
        str(assumption_id),
        description=body.description,
        confidence=body.confidence,
        importance=body.importance,
    )


@router.delete("/{assumption_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assumption(
    project_id: UUID,
    assumption_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    """Delete and strip this assumption's tags from every interview."""
    await service.delete_assumption(str(project_id), str(assumption_id))


@router.post("/{assumption_id}/status", response_model=AssumptionResponse)
async def change_status(
    project_id: UUID,
    assumption_id: UUID,
    body: StatusChange,
    service: DiscoveryService = Depends(get_discovery_service),
):
    return await service.change_status(str(project_id), str(assumption_id), body.status)


@router.post("/{assumption_id}/evidence", response_model=AssumptionResponse)
async def add_evidence(
    project_id: UUID,
    assumption_id: UUID,
    body: EvidenceCreate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    return await service.add_evidence(str(project_id), str(assumption_id), body.text)


@router.get("/{assumption_id}/eligibility", response_model=EligibilityResponse)
async def get_eligibility(
    project_id: UUID,
    assumption_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    eligibility, summary = await service.eligibility(str(project_id), str(assumption_id))
    if eligibility.suggest_pivot:
        logger.info(
            f"Pivot suggested: {eligibility.reason}",
            extra={"project_id": str(project_id), "assumption_id": str(assumption_id)},
        )
    return EligibilityResponse(
        can_validate=eligibility.can_validate,
        suggested_status=eligibility.suggested_status,
        reason=eligibility.reason,
        message=validation_suggestion_message(eligibility),
        support_ratio=eligibility.support_ratio,
        support_count=eligibility.support_count,
        contradict_count=eligibility.contradict_count,
        total_interviews=eligibility.total_interviews,
        suggest_pivot=eligibility.suggest_pivot,
        evidence=EvidenceSummaryResponse.model_validate(summary),
    )


@router.post("/{assumption_id}/accept-suggestion", response_model=AssumptionResponse)
async def accept_suggestion(
    project_id: UUID,
    assumption_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    """Apply the current suggestion. 409 when the evidence does not support a change."""
    return await service.accept_suggestion(str(project_id), str(assumption_id))
