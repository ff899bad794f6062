"""Assumption Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - confidence / importance are 1-5 integers (out of range -> 400, never clamped)
    - description: 1-2000 chars, stripped, non-empty
    - Responses read core entities via from_attributes
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from founder_discovery.core.domain_types import (
    AssumptionStatus,
    AssumptionType,
    CanvasArea,
    MAX_RATING,
    MIN_RATING,
    PriorityLevel,
    ValidationEffect,
    ValidationStage,
)


class AssumptionCreate(BaseModel):
    type: AssumptionType
    description: str = Field(min_length=1, max_length=2000)
    canvas_area: CanvasArea
    confidence: int = Field(3, ge=MIN_RATING, le=MAX_RATING)
    importance: int = Field(3, ge=MIN_RATING, le=MAX_RATING)
    validation_stage: ValidationStage | None = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description cannot be empty or whitespace")
        return v


class AssumptionUpdate(BaseModel):
    description: str | None = Field(None, min_length=1, max_length=2000)
    confidence: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)
    importance: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)


class StatusChange(BaseModel):
    status: AssumptionStatus


class EvidenceCreate(BaseModel):
    text: str = Field(min_length=1, max_length=2000)


class AssumptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: AssumptionType
    description: str
    canvas_area: CanvasArea
    status: AssumptionStatus
    confidence: int
    importance: int
    validation_stage: ValidationStage | None = None
    risk_score: int | None = None
    priority: PriorityLevel | None = None
    evidence: list[str] = []
    interview_count: int = 0
    last_tested_date: date | None = None
    created: datetime | None = None
    last_updated: datetime | None = None


class AssumptionCreated(AssumptionResponse):
    """Creation response; warning is set when the explicit stage contradicts the canvas area."""
    warning: str | None = None


class EvidenceSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    supports: int
    contradicts: int
    neutral: int
    total_interviews: int
    net_effect: ValidationEffect
    total_confidence_change: int
    last_tested_date: date | None = None


class EligibilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    can_validate: bool
    suggested_status: AssumptionStatus
    reason: str
    message: str
    support_ratio: float | None = None
    support_count: int | None = None
    contradict_count: int | None = None
    total_interviews: int | None = None
    suggest_pivot: bool = False
    evidence: EvidenceSummaryResponse
