"""Project Schemas: creation, partial update and response.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - validation_overrides keys are checked by the service (unknown keys -> 400)
    - ProjectUpdate distinguishes "beachhead omitted" from "beachhead cleared" via
      model_fields_set
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from founder_discovery.core.entities import Project


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    beachhead_segment_name: str | None = Field(None, max_length=200)
    validation_overrides: dict[str, int | float] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    beachhead_segment_name: str | None = Field(None, max_length=200)
    validation_overrides: dict[str, int | float] | None = None


class ProjectResponse(BaseModel):
    id: UUID
    name: str
    beachhead_segment_name: str | None = None
    validation_overrides: dict[str, int | float] = {}
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            beachhead_segment_name=project.beachhead_segment_name,
            validation_overrides=project.validation_overrides,
            created_at=project.created,
        )
