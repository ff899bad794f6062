"""Discovery Entities: immutable snapshots of assumptions and interviews.

Invariants:
    - Entities are frozen: the engine never mutates what the shell hands it
    - Collections are tuples so snapshots stay immutable end to end
    - Interview.assumption_tags is the only link between interviews and assumptions
      (many-to-many through the embedded list, no join entity)
    - risk_score / priority / validation_stage may be absent; readers go through the
      compute-if-absent accessors in scoring.py and stages.py

Design Decisions:
    - Frozen dataclasses over Pydantic models in the core: Pydantic stays at the API boundary
    - dataclasses.replace() for updates: lifecycle helpers return new instances
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from founder_discovery.core.domain_types import (
    AssumptionStatus,
    AssumptionType,
    CanvasArea,
    DEFAULT_CONFIDENCE,
    DEFAULT_IMPORTANCE,
    IntervieweeType,
    InterviewStatus,
    PriorityLevel,
    ValidationEffect,
    ValidationStage,
)


@dataclass(frozen=True)
class Assumption:
    """A belief about customers, problems, or solutions awaiting evidence."""
    id: str
    type: AssumptionType
    description: str
    canvas_area: CanvasArea
    status: AssumptionStatus = AssumptionStatus.UNTESTED
    confidence: int = DEFAULT_CONFIDENCE
    importance: int = DEFAULT_IMPORTANCE
    validation_stage: ValidationStage | None = None
    risk_score: int | None = None
    priority: PriorityLevel | None = None
    evidence: tuple[str, ...] = ()
    # Advisory cache of distinct tagging interviews; see lifecycle.recount_interviews
    interview_count: int = 0
    last_tested_date: date | None = None
    created: datetime | None = None
    last_updated: datetime | None = None


@dataclass(frozen=True)
class AssumptionTag:
    """One interview's verdict on one assumption."""
    assumption_id: str
    validation_effect: ValidationEffect = ValidationEffect.NEUTRAL
    confidence_change: int = 0   # -2..2
    quote: str | None = None


@dataclass(frozen=True)
class Interview:
    """A structured customer interview record."""
    id: str
    segment_name: str
    date: date
    interviewee_type: IntervieweeType = IntervieweeType.CUSTOMER
    context: str = ""
    status: InterviewStatus = InterviewStatus.COMPLETED
    main_pain_points: str = ""
    current_alternatives: str = ""
    problem_importance: int = 3
    memorable_quotes: tuple[str, ...] = ()
    surprising_feedback: str = ""
    student_reflection: str = ""
    assumption_tags: tuple[AssumptionTag, ...] = field(default_factory=tuple)
    matches_beachhead: bool | None = None


@dataclass(frozen=True)
class Project:
    """Aggregate root: owns assumptions and interviews, names the beachhead."""
    id: str
    name: str
    beachhead_segment_name: str | None = None
    validation_overrides: dict = field(default_factory=dict)
    created: datetime | None = None


@dataclass(frozen=True)
class StageStatus:
    """Derived per-stage evaluation. Recomputed on every pass, never persisted."""
    stage: ValidationStage
    interview_count: int
    interviews_needed: int
    avg_confidence: float
    validated_count: int
    invalidated_count: int
    untested_count: int
    total_assumptions: int
    can_graduate: bool
    is_unlocked: bool
    recommendation: str
