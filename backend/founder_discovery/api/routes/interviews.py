"""Interviews: record conversations and tag them against assumptions.

Invariants:
    - POST applies each tag once: confidence nudge, evidence line, interview_count
    - PATCH and DELETE only recount interview_count; earlier nudges are not replayed
    - Tags pointing at assumptions outside the project are rejected with 400
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from founder_discovery.api.dependencies import get_discovery_service
from founder_discovery.schemas.interview import (
    InterviewCreate, InterviewResponse, InterviewUpdate,
)
from founder_discovery.services.discovery_service import (
    DiscoveryService, interview_fields,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/projects/{project_id}/interviews", tags=["interviews"],
)

_NULLABLE = {"matches_beachhead"}


@router.post(
    "", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED,
)
async def create_interview(
    project_id: UUID,
    body: InterviewCreate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    interview = await service.create_interview(
        str(project_id),
        interview_fields(body.model_dump(exclude={"assumption_tags"})),
        [t.to_entity() for t in body.assumption_tags],
    )
    return InterviewResponse.from_entity(interview)


@router.get("", response_model=list[InterviewResponse])
async def list_interviews(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    interviews = await service.list_interviews(str(project_id))
    return [InterviewResponse.from_entity(i) for i in interviews]


@router.get("/{interview_id}", response_model=InterviewResponse)
async def get_interview(
    project_id: UUID,
    interview_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    interview = await service.get_interview(str(project_id), str(interview_id))
    return InterviewResponse.from_entity(interview)


@router.patch("/{interview_id}", response_model=InterviewResponse)
async def update_interview(
    project_id: UUID,
    interview_id: UUID,
    body: InterviewUpdate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    fields = {
        k: v
        for k, v in body.model_dump(exclude_unset=True, exclude={"assumption_tags"}).items()
        if v is not None or k in _NULLABLE
    }
    tags = (
        [t.to_entity() for t in body.assumption_tags]
        if body.assumption_tags is not None else None
    )
    interview = await service.update_interview(
        str(project_id), str(interview_id), interview_fields(fields), tags,
    )
    logger.info(
        f"Interview updated: {sorted(fields)}"
        + (f", {len(tags)} tag(s)" if tags is not None else ""),
        extra={"project_id": str(project_id), "interview_id": str(interview_id)},
    )
    return InterviewResponse.from_entity(interview)


@router.delete("/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interview(
    project_id: UUID,
    interview_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    await service.delete_interview(str(project_id), str(interview_id))
