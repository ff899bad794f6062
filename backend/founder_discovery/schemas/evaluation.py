"""Evaluation Schemas: stage statuses, progress, interview requirements, beachhead scoring.

Invariants:
    - Every payload here is derived per request; nothing is persisted
    - Stage numbers serialize as integers 1-3
"""

from pydantic import BaseModel, ConfigDict, Field

from founder_discovery.core.domain_types import MAX_RATING, MIN_RATING, ValidationStage
from founder_discovery.core.entities import StageStatus
from founder_discovery.core.stages import StageDefinition
from founder_discovery.schemas.assumption import AssumptionResponse


class StageStatusResponse(BaseModel):
    stage: ValidationStage
    name: str
    question: str
    interview_count: int
    interviews_needed: int
    minimum_interviews: int
    avg_confidence: float
    validated_count: int
    invalidated_count: int
    untested_count: int
    total_assumptions: int
    can_graduate: bool
    is_unlocked: bool
    recommendation: str

    @classmethod
    def from_status(
        cls, status: StageStatus, definition: StageDefinition,
    ) -> "StageStatusResponse":
        return cls(
            stage=status.stage,
            name=definition.name,
            question=definition.question,
            interview_count=status.interview_count,
            interviews_needed=status.interviews_needed,
            minimum_interviews=definition.minimum_interviews,
            avg_confidence=status.avg_confidence,
            validated_count=status.validated_count,
            invalidated_count=status.invalidated_count,
            untested_count=status.untested_count,
            total_assumptions=status.total_assumptions,
            can_graduate=status.can_graduate,
            is_unlocked=status.is_unlocked,
            recommendation=status.recommendation,
        )


class StagesResponse(BaseModel):
    stages: list[StageStatusResponse]
    highest_unlocked_stage: ValidationStage


class ProgressResponse(StagesResponse):
    overall_progress: int = Field(ge=0, le=100)


class InterviewRequirementsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stage1_interviews: int
    stage1_required: int
    stage1_complete: bool
    beachhead_interviews: int
    beachhead_required: int
    beachhead_complete: bool
    total_interviews: int
    overall_progress: int


class InterviewPrioritiesResponse(BaseModel):
    recommended: list[AssumptionResponse]
    by_stage: dict[int, list[AssumptionResponse]]


class SegmentRatingRequest(BaseModel):
    name: str = Field("", max_length=200)
    pain: int = Field(ge=MIN_RATING, le=MAX_RATING)
    access: int = Field(ge=MIN_RATING, le=MAX_RATING)
    willingness: int = Field(ge=MIN_RATING, le=MAX_RATING)


class BeachheadReadinessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    score: int
    max_score: int
    is_ready: bool
    guidance: str


class BeachheadRecommendationRequest(BaseModel):
    segments: list[SegmentRatingRequest] = Field(min_length=1)


class BeachheadRecommendationResponse(BaseModel):
    name: str
    readiness: BeachheadReadinessResponse
