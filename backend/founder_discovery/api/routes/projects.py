"""Projects: create, read, update and delete the aggregate root.

Invariants:
    - Unknown or inconsistent validation_overrides are rejected with 400
    - Deleting a project cascades to its assumptions and interviews
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from founder_discovery.api.dependencies import get_discovery_service
from founder_discovery.schemas.project import (
    ProjectCreate, ProjectResponse, ProjectUpdate,
)
from founder_discovery.services.discovery_service import DiscoveryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    project = await service.create_project(
        body.name, body.beachhead_segment_name, body.validation_overrides,
    )
    return ProjectResponse.from_entity(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    return ProjectResponse.from_entity(await service.get_project(str(project_id)))


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    service: DiscoveryService = Depends(get_discovery_service),
):
    """Partial update. Sending beachhead_segment_name: null clears the beachhead."""
    changes = {}
    if "beachhead_segment_name" in body.model_fields_set:
        changes["beachhead_segment_name"] = body.beachhead_segment_name
    project = await service.update_project(
        str(project_id),
        name=body.name,
        validation_overrides=body.validation_overrides,
        **changes,
    )
    logger.info(
        f"Project updated: {sorted(body.model_fields_set)}",
        extra={"project_id": str(project_id)},
    )
    return ProjectResponse.from_entity(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    service: DiscoveryService = Depends(get_discovery_service),
):
    await service.delete_project(str(project_id))
