"""Evaluation: stage statuses, overall progress and interview guidance for a project.

Invariants:
    - Read-only: every response is recomputed from the current snapshot
    - Stage lock state always reflects the predecessor's fresh evaluation
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from founder_discovery.api.dependencies import get_discovery_service
from founder_discovery.core.interview_requirements import DEFAULT_RECOMMENDATION_LIMIT
from founder_discovery.core.stage_evaluation import highest_unlocked_stage
from founder_discovery.core.stages import stage_table
from founder_discovery.schemas.assumption import AssumptionResponse
from founder_discovery.schemas.evaluation import (
    InterviewPrioritiesResponse,
    InterviewRequirementsResponse,
    ProgressResponse,
    StageStatusResponse,
    StagesResponse,
)
from founder_discovery.services.discovery_service import DiscoveryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects/{project_id}", tags=["evaluation"])


def _stage_responses(statuses, config) -> list[StageStatusResponse]:
    table = stage_table(config)
    return [
        StageStatusResponse.from_status(statuses[stage], table[stage])
        for stage in sorted(statuses)
    ]


@router.get("/stages", response_model=StagesResponse)
async def get_stages(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    project = await service.get_project(str(project_id))
    statuses = await service.evaluate(str(project_id))
    highest = highest_unlocked_stage(statuses)
    logger.info(
        f"Stages evaluated: Stage {int(highest)} is the highest unlocked",
        extra={"project_id": str(project_id), "stage": int(highest)},
    )
    return StagesResponse(
        stages=_stage_responses(statuses, service.config_for(project)),
        highest_unlocked_stage=highest,
    )


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    project = await service.get_project(str(project_id))
    progress = await service.progress(str(project_id))
    return ProgressResponse(
        overall_progress=progress["overall_progress"],
        highest_unlocked_stage=progress["highest_unlocked_stage"],
        stages=_stage_responses(progress["stages"], service.config_for(project)),
    )


@router.get("/interview-requirements", response_model=InterviewRequirementsResponse)
async def get_interview_requirements(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    requirements = await service.interview_requirements(str(project_id))
    return InterviewRequirementsResponse.model_validate(requirements)


@router.get("/interview-priorities", response_model=InterviewPrioritiesResponse)
async def get_interview_priorities(
    project_id: UUID,
    limit: int = Query(DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=50),
    service: DiscoveryService = Depends(get_discovery_service),
):
    priorities = await service.interview_priorities(str(project_id), limit)
    return InterviewPrioritiesResponse(
        recommended=[AssumptionResponse.model_validate(a) for a in priorities.recommended],
        by_stage={
            int(stage): [AssumptionResponse.model_validate(a) for a in assumptions]
            for stage, assumptions in priorities.by_stage.items()
        },
    )
