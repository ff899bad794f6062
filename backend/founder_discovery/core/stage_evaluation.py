"""Stage Evaluation: per-stage statistics, graduation and lock status.

Invariants:
    - All functions are PURE: no IO, no side effects, inputs never mutated
    - Stage assumptions = explicit stage OR canvas area in the stage's areas (union)
    - can_graduate requires interviews, confidence, invalidation limit AND >= 1 assumption
    - Stage 1 is always unlocked; stage N>1 is unlocked iff stage N-1 can graduate
    - evaluate_all_stages is a strict left-to-right fold over stages 1, 2, 3
    - Empty stages report avg_confidence 0, never divide by zero
    - Unmet criteria are reported together in one recommendation, not first-failure-only
    - Malformed snapshots (ratings outside 1-5, unknown canvas areas) raise
      InputValidationError before anything is computed

Design Decisions:
    - Graduation compares the unrounded mean; the reported avg_confidence is rounded
      to one decimal for display
    - calculate_overall_progress (40/40/20 stage weights) is distinct from
      interview_requirements.calculate_interview_requirements progress
"""

from typing import Iterable, Sequence

from founder_discovery.core.domain_types import AssumptionStatus, ValidationStage
from founder_discovery.core.entities import Assumption, Interview, StageStatus
from founder_discovery.core.enforce_inputs import require_valid_snapshot
from founder_discovery.core.evidence_index import EvidenceIndex
from founder_discovery.core.scoring import resolve_risk_score, round_half_up
from founder_discovery.core.stages import (
    StageDefinition, belongs_to_stage, get_stage_definition,
)
from founder_discovery.core.validation_config import (
    DEFAULT_VALIDATION_CONFIG, ValidationConfig,
)

STAGE_WEIGHTS: dict[ValidationStage, int] = {
    ValidationStage.CUSTOMER_PROBLEM: 40,
    ValidationStage.PROBLEM_SOLUTION: 40,
    ValidationStage.BUSINESS_MODEL: 20,
}
PARTIAL_CREDIT_CAP = 0.99

STATUS_ORDER: dict[AssumptionStatus, int] = {
    AssumptionStatus.UNTESTED: 0,
    AssumptionStatus.TESTING: 1,
    AssumptionStatus.VALIDATED: 2,
    AssumptionStatus.INVALIDATED: 3,
}


def select_stage_assumptions(
    assumptions: Iterable[Assumption], definition: StageDefinition,
) -> list[Assumption]:
    return [a for a in assumptions if belongs_to_stage(a, definition)]


def evaluate_stage(
    stage: ValidationStage,
    assumptions: Sequence[Assumption],
    interviews: Sequence[Interview],
    previous_stage_graduated: bool = True,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    index: EvidenceIndex | None = None,
) -> StageStatus:
    """Evaluate one stage against the current snapshot.

    Raises InputValidationError when an assumption or interview is malformed.
    """
    require_valid_snapshot(assumptions, interviews)
    return _evaluate_stage(
        stage, assumptions, interviews, previous_stage_graduated, config, index,
    )


def _evaluate_stage(
    stage: ValidationStage,
    assumptions: Sequence[Assumption],
    interviews: Sequence[Interview],
    previous_stage_graduated: bool,
    config: ValidationConfig,
    index: EvidenceIndex | None,
) -> StageStatus:
    definition = get_stage_definition(stage, config)
    index = index if index is not None else EvidenceIndex(interviews)

    stage_assumptions = select_stage_assumptions(assumptions, definition)
    interview_count = len(index.interview_ids_for(a.id for a in stage_assumptions))

    total = len(stage_assumptions)
    avg_confidence = (
        sum(a.confidence for a in stage_assumptions) / total if total else 0.0
    )
    validated = _count_status(stage_assumptions, AssumptionStatus.VALIDATED)
    invalidated = _count_status(stage_assumptions, AssumptionStatus.INVALIDATED)
    untested = _count_status(stage_assumptions, AssumptionStatus.UNTESTED)

    criteria = definition.graduation_criteria
    interviews_needed = max(0, definition.minimum_interviews - interview_count)
    can_graduate = (
        interview_count >= definition.minimum_interviews
        and avg_confidence >= criteria.min_confidence
        and invalidated <= criteria.max_invalidated
        and total > 0
    )
    is_unlocked = definition.stage == ValidationStage.CUSTOMER_PROBLEM or previous_stage_graduated

    return StageStatus(
        stage=definition.stage,
        interview_count=interview_count,
        interviews_needed=interviews_needed,
        avg_confidence=round_half_up(avg_confidence, 1),
        validated_count=validated,
        invalidated_count=invalidated,
        untested_count=untested,
        total_assumptions=total,
        can_graduate=can_graduate,
        is_unlocked=is_unlocked,
        recommendation=stage_recommendation(
            definition, total, interview_count, avg_confidence,
            invalidated, can_graduate, is_unlocked,
        ),
    )


def stage_recommendation(
    definition: StageDefinition,
    total_assumptions: int,
    interview_count: int,
    avg_confidence: float,
    invalidated_count: int,
    can_graduate: bool,
    is_unlocked: bool,
) -> str:
    """Priority-ordered guidance: locked > empty > success > unmet criteria."""
    stage = int(definition.stage)
    if not is_unlocked:
        return f"Complete Stage {stage - 1} validation before working on Stage {stage}."

    if total_assumptions == 0:
        return f"Add assumptions for {definition.name} to begin validation."

    if can_graduate:
        if definition.stage < ValidationStage.BUSINESS_MODEL:
            return f"Stage {stage} validated! You can now proceed to Stage {stage + 1}."
        return "All stages validated! Your business model is ready for execution."

    criteria = definition.graduation_criteria
    issues: list[str] = []
    if interview_count < definition.minimum_interviews:
        needed = definition.minimum_interviews - interview_count
        issues.append(f"{needed} more interview{'s' if needed > 1 else ''} needed")
    if avg_confidence < criteria.min_confidence:
        issues.append(
            f"average confidence too low ({round_half_up(avg_confidence, 1):.1f}/5, "
            f"need {criteria.min_confidence:g})",
        )
    if invalidated_count > criteria.max_invalidated:
        issues.append(
            f"{invalidated_count} invalidated assumptions "
            f"(max {criteria.max_invalidated} allowed)",
        )

    if issues:
        return f"To complete Stage {stage}: {', '.join(issues)}."
    return "Continue testing your assumptions with more interviews."


def evaluate_all_stages(
    assumptions: Sequence[Assumption],
    interviews: Sequence[Interview],
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> dict[ValidationStage, StageStatus]:
    """Fold stages in order; each stage's lock depends on its predecessor's fresh result."""
    require_valid_snapshot(assumptions, interviews)
    index = EvidenceIndex(interviews)
    statuses: dict[ValidationStage, StageStatus] = {}
    previous_graduated = True
    for stage in sorted(ValidationStage):
        status = _evaluate_stage(
            stage, assumptions, interviews, previous_graduated, config, index,
        )
        statuses[stage] = status
        previous_graduated = status.can_graduate
    return statuses


def highest_unlocked_stage(
    statuses: dict[ValidationStage, StageStatus],
) -> ValidationStage:
    for stage in sorted(statuses, reverse=True):
        if statuses[stage].is_unlocked:
            return stage
    return ValidationStage.CUSTOMER_PROBLEM


def assumption_sort_key(assumption: Assumption) -> tuple[int, int]:
    """Open work first, then riskiest first."""
    return (
        STATUS_ORDER[AssumptionStatus(assumption.status)],
        -resolve_risk_score(assumption),
    )


def sorted_assumptions_for_stage(
    assumptions: Sequence[Assumption],
    stage: ValidationStage,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> list[Assumption]:
    require_valid_snapshot(assumptions, ())
    definition = get_stage_definition(stage, config)
    return sorted(select_stage_assumptions(assumptions, definition), key=assumption_sort_key)


def calculate_overall_progress(
    statuses: dict[ValidationStage, StageStatus],
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> int:
    """Stage-weighted completion (40/40/20) with partial credit, as 0-100."""
    total_weight = 0
    completed_weight = 0.0
    for stage in sorted(ValidationStage):
        status = statuses[stage]
        weight = STAGE_WEIGHTS[stage]
        total_weight += weight
        if status.can_graduate:
            completed_weight += weight
        elif status.total_assumptions > 0:
            progress = (
                status.validated_count / status.total_assumptions * 0.7
                + status.interview_count / config.min_interviews(stage) * 0.3
            )
            completed_weight += weight * min(progress, PARTIAL_CREDIT_CAP)
    return round_half_up(completed_weight / total_weight * 100)


def _count_status(assumptions: Iterable[Assumption], status: AssumptionStatus) -> int:
    return sum(1 for a in assumptions if a.status == status)
