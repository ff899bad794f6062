"""Interview Schemas: interview records and their assumption tags.

Invariants:
    - confidence_change within -2..2, problem_importance within 1..5
    - Tags may only reference assumptions of the same project (checked by the service)
    - The wire name for the interview date is interview_date
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from founder_discovery.core.domain_types import (
    IntervieweeType,
    InterviewStatus,
    MAX_CONFIDENCE_CHANGE,
    MAX_RATING,
    MIN_CONFIDENCE_CHANGE,
    MIN_RATING,
    ValidationEffect,
)
from founder_discovery.core.entities import AssumptionTag, Interview


class AssumptionTagSchema(BaseModel):
    assumption_id: str
    validation_effect: ValidationEffect = ValidationEffect.NEUTRAL
    confidence_change: int = Field(0, ge=MIN_CONFIDENCE_CHANGE, le=MAX_CONFIDENCE_CHANGE)
    quote: str | None = Field(None, max_length=2000)

    def to_entity(self) -> AssumptionTag:
        return AssumptionTag(
            assumption_id=self.assumption_id,
            validation_effect=self.validation_effect,
            confidence_change=self.confidence_change,
            quote=self.quote,
        )


class InterviewCreate(BaseModel):
    segment_name: str = Field(min_length=1, max_length=200)
    interview_date: date
    interviewee_type: IntervieweeType = IntervieweeType.CUSTOMER
    context: str = Field("", max_length=5000)
    status: InterviewStatus = InterviewStatus.COMPLETED
    main_pain_points: str = Field("", max_length=5000)
    current_alternatives: str = Field("", max_length=5000)
    problem_importance: int = Field(3, ge=MIN_RATING, le=MAX_RATING)
    memorable_quotes: list[str] = []
    surprising_feedback: str = Field("", max_length=5000)
    student_reflection: str = Field("", max_length=5000)
    assumption_tags: list[AssumptionTagSchema] = []
    matches_beachhead: bool | None = None

    @field_validator("segment_name")
    @classmethod
    def strip_segment_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("segment_name cannot be empty or whitespace")
        return v


class InterviewUpdate(BaseModel):
    """Partial update. Omitted fields are left alone; tags are replaced wholesale."""
    segment_name: str | None = Field(None, min_length=1, max_length=200)
    interview_date: date | None = None
    interviewee_type: IntervieweeType | None = None
    context: str | None = Field(None, max_length=5000)
    status: InterviewStatus | None = None
    main_pain_points: str | None = Field(None, max_length=5000)
    current_alternatives: str | None = Field(None, max_length=5000)
    problem_importance: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)
    memorable_quotes: list[str] | None = None
    surprising_feedback: str | None = Field(None, max_length=5000)
    student_reflection: str | None = Field(None, max_length=5000)
    assumption_tags: list[AssumptionTagSchema] | None = None
    matches_beachhead: bool | None = None


class InterviewResponse(BaseModel):
    id: UUID
    segment_name: str
    interview_date: date
    interviewee_type: IntervieweeType
    context: str
    status: InterviewStatus
    main_pain_points: str
    current_alternatives: str
    problem_importance: int
    memorable_quotes: list[str]
    surprising_feedback: str
    student_reflection: str
    assumption_tags: list[AssumptionTagSchema]
    matches_beachhead: bool | None = None

    @classmethod
    def from_entity(cls, interview: Interview) -> "InterviewResponse":
        return cls(
            id=interview.id,
            segment_name=interview.segment_name,
            interview_date=interview.date,
            interviewee_type=interview.interviewee_type,
            context=interview.context,
            status=interview.status,
            main_pain_points=interview.main_pain_points,
            current_alternatives=interview.current_alternatives,
            problem_importance=interview.problem_importance,
            memorable_quotes=list(interview.memorable_quotes),
            surprising_feedback=interview.surprising_feedback,
            student_reflection=interview.student_reflection,
            assumption_tags=[
                AssumptionTagSchema(
                    assumption_id=t.assumption_id,
                    validation_effect=t.validation_effect,
                    confidence_change=t.confidence_change,
                    quote=t.quote,
                )
                for t in interview.assumption_tags
            ],
            matches_beachhead=interview.matches_beachhead,
        )
