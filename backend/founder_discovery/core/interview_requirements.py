"""Interview Requirements: beachhead matching and interview-sufficiency progress.

Invariants:
    - matches_beachhead: explicit interview flag wins; otherwise segment names are
      compared case- and whitespace-insensitively
    - A blank beachhead name matches every interview that carries no explicit flag
    - stage1_interviews counts DISTINCT interviews tagging >= 1 stage-1 assumption
    - overall_progress is the unweighted mean of two capped ratios, as 0-100
    - This progress number is separate from stage_evaluation.calculate_overall_progress
    - Malformed snapshots raise InputValidationError before any counting
"""

from dataclasses import dataclass, field
from typing import Sequence

from founder_discovery.core.domain_types import AssumptionStatus, ValidationStage
from founder_discovery.core.entities import Assumption, Interview, StageStatus
from founder_discovery.core.enforce_inputs import require_valid_snapshot
from founder_discovery.core.evidence_index import EvidenceIndex
from founder_discovery.core.scoring import round_half_up
from founder_discovery.core.stage_evaluation import assumption_sort_key
from founder_discovery.core.stages import assumption_stage
from founder_discovery.core.validation_config import (
    DEFAULT_VALIDATION_CONFIG, ValidationConfig,
)

DEFAULT_RECOMMENDATION_LIMIT = 5
_OPEN_STATUSES = (AssumptionStatus.UNTESTED, AssumptionStatus.TESTING)


def normalize_segment_name(name: str | None) -> str:
    return " ".join((name or "").split()).lower()


def matches_beachhead(interview: Interview, beachhead_segment_name: str | None) -> bool:
    if interview.matches_beachhead is not None:
        return interview.matches_beachhead
    target = normalize_segment_name(beachhead_segment_name)
    if not target:
        return True
    return normalize_segment_name(interview.segment_name) == target


def count_beachhead_interviews(
    interviews: Sequence[Interview], beachhead_segment_name: str | None,
) -> int:
    return sum(1 for i in interviews if matches_beachhead(i, beachhead_segment_name))


@dataclass(frozen=True)
class InterviewRequirements:
    stage1_interviews: int
    stage1_required: int
    stage1_complete: bool
    beachhead_interviews: int
    beachhead_required: int
    beachhead_complete: bool
    total_interviews: int
    overall_progress: int   # 0-100


def _capped_ratio(count: int, required: int) -> float:
    if required <= 0:
        return 1.0
    return min(count / required, 1.0)


def calculate_interview_requirements(
    interviews: Sequence[Interview],
    assumptions: Sequence[Assumption],
    beachhead_segment_name: str | None,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> InterviewRequirements:
    require_valid_snapshot(assumptions, interviews)
    index = EvidenceIndex(interviews)
    stage1_ids = [
        a.id for a in assumptions
        if assumption_stage(a) == ValidationStage.CUSTOMER_PROBLEM
    ]
    stage1_interviews = len(index.interview_ids_for(stage1_ids))
    beachhead_interviews = count_beachhead_interviews(interviews, beachhead_segment_name)

    stage1_required = config.stage1_min_interviews
    beachhead_required = config.minimum_beachhead_interviews
    progress = (
        _capped_ratio(stage1_interviews, stage1_required)
        + _capped_ratio(beachhead_interviews, beachhead_required)
    ) / 2

    return InterviewRequirements(
        stage1_interviews=stage1_interviews,
        stage1_required=stage1_required,
        stage1_complete=stage1_interviews >= stage1_required,
        beachhead_interviews=beachhead_interviews,
        beachhead_required=beachhead_required,
        beachhead_complete=beachhead_interviews >= beachhead_required,
        total_interviews=len(interviews),
        overall_progress=round_half_up(progress * 100),
    )


@dataclass(frozen=True)
class InterviewPriorities:
    """Which assumptions the next interview should test."""
    by_stage: dict[ValidationStage, list[Assumption]] = field(default_factory=dict)
    recommended: list[Assumption] = field(default_factory=list)


def prioritized_assumptions_for_interview(
    assumptions: Sequence[Assumption],
    statuses: dict[ValidationStage, StageStatus],
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> InterviewPriorities:
    """Stage 1 open work first; later stages join once their predecessor graduates."""
    require_valid_snapshot(assumptions, ())
    by_stage = {
        stage: sorted(
            (a for a in assumptions if assumption_stage(a) == stage),
            key=assumption_sort_key,
        )
        for stage in sorted(ValidationStage)
    }

    recommended: list[Assumption] = []
    for stage in sorted(ValidationStage):
        if stage > ValidationStage.CUSTOMER_PROBLEM and not statuses[stage - 1].can_graduate:
            break
        recommended.extend(a for a in by_stage[stage] if a.status in _OPEN_STATUSES)

    return InterviewPriorities(by_stage=by_stage, recommended=recommended[:limit])
