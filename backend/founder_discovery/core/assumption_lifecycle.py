"""Assumption Lifecycle: creation, rating edits, status transitions, interview effects.

Invariants:
    - All functions return NEW snapshots; inputs are never mutated
    - Status machine: untested -> testing -> {validated, invalidated};
      testing -> untested and validated/invalidated -> testing only by explicit action;
      self-transitions are rejected
    - Risk score and priority are recomputed whenever confidence or importance changes
    - Interview tags nudge confidence by confidence_change with the RESULT clamped to 1..5;
      the tag values themselves must already be valid (enforce_inputs)
    - Evidence is append-only
    - Removing an assumption strips its tags from every interview
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Sequence

from founder_discovery.core.domain_types import (
    AssumptionStatus,
    AssumptionType,
    CanvasArea,
    DEFAULT_CONFIDENCE,
    DEFAULT_IMPORTANCE,
    MAX_RATING,
    MIN_RATING,
    ValidationEffect,
    ValidationStage,
)
from founder_discovery.core.entities import Assumption, Interview
from founder_discovery.core.errors import InvalidStatusTransitionError
from founder_discovery.core.evidence_index import EvidenceIndex
from founder_discovery.core.scoring import compute_priority, compute_risk_score
from founder_discovery.core.stages import stage_for_area
from founder_discovery.core.validation_eligibility import ValidationEligibility

ALLOWED_TRANSITIONS: dict[AssumptionStatus, frozenset[AssumptionStatus]] = {
    AssumptionStatus.UNTESTED: frozenset({AssumptionStatus.TESTING}),
    AssumptionStatus.TESTING: frozenset({
        AssumptionStatus.UNTESTED,
        AssumptionStatus.VALIDATED,
        AssumptionStatus.INVALIDATED,
    }),
    AssumptionStatus.VALIDATED: frozenset({AssumptionStatus.TESTING}),
    AssumptionStatus.INVALIDATED: frozenset({AssumptionStatus.TESTING}),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_assumption(
    assumption_id: str,
    assumption_type: AssumptionType,
    description: str,
    canvas_area: CanvasArea,
    confidence: int = DEFAULT_CONFIDENCE,
    importance: int = DEFAULT_IMPORTANCE,
    validation_stage: ValidationStage | None = None,
    now: datetime | None = None,
) -> Assumption:
    """New untested assumption with derived stage, risk score and priority."""
    risk = compute_risk_score(confidence, importance)
    now = now or _now()
    return Assumption(
        id=assumption_id,
        type=AssumptionType(assumption_type),
        description=description,
        canvas_area=CanvasArea(canvas_area),
        status=AssumptionStatus.UNTESTED,
        confidence=confidence,
        importance=importance,
        validation_stage=(
            ValidationStage(validation_stage)
            if validation_stage is not None
            else stage_for_area(canvas_area)
        ),
        risk_score=risk,
        priority=compute_priority(risk),
        created=now,
        last_updated=now,
    )


def update_ratings(
    assumption: Assumption,
    confidence: int | None = None,
    importance: int | None = None,
    now: datetime | None = None,
) -> Assumption:
    confidence = assumption.confidence if confidence is None else confidence
    importance = assumption.importance if importance is None else importance
    risk = compute_risk_score(confidence, importance)
    return replace(
        assumption,
        confidence=confidence,
        importance=importance,
        risk_score=risk,
        priority=compute_priority(risk),
        last_updated=now or _now(),
    )


def can_transition(current: AssumptionStatus, requested: AssumptionStatus) -> bool:
    return AssumptionStatus(requested) in ALLOWED_TRANSITIONS[AssumptionStatus(current)]


def transition_status(
    assumption: Assumption, new_status: AssumptionStatus, now: datetime | None = None,
) -> Assumption:
    current = AssumptionStatus(assumption.status)
    requested = AssumptionStatus(new_status)
    if not can_transition(current, requested):
        raise InvalidStatusTransitionError(current.value, requested.value)
    return replace(assumption, status=requested, last_updated=now or _now())


def accept_suggestion(
    assumption: Assumption,
    eligibility: ValidationEligibility,
    now: datetime | None = None,
) -> Assumption:
    """Apply an engine suggestion the user accepted.

    Only eligible suggestions (validated / invalidated) can be accepted. An
    untested assumption passes through testing on the way.
    """
    target = AssumptionStatus(eligibility.suggested_status)
    if not eligibility.can_validate:
        raise InvalidStatusTransitionError(
            AssumptionStatus(assumption.status).value, target.value,
        )
    if assumption.status == AssumptionStatus.UNTESTED:
        assumption = transition_status(assumption, AssumptionStatus.TESTING, now)
    return transition_status(assumption, target, now)


def add_evidence(
    assumption: Assumption, text: str, now: datetime | None = None,
) -> Assumption:
    return replace(
        assumption,
        evidence=(*assumption.evidence, text),
        last_updated=now or _now(),
    )


def _clamp_rating(value: int) -> int:
    return max(MIN_RATING, min(MAX_RATING, value))


def apply_interview_tags(
    assumptions: Sequence[Assumption],
    interview: Interview,
    now: datetime | None = None,
) -> list[Assumption]:
    """Fold one interview's tags into the tagged assumptions.

    Each tag nudges confidence and appends an evidence line; interview_count
    grows once per distinct assumption. Tags pointing at unknown assumptions
    are ignored. Status is left untouched.
    """
    now = now or _now()
    tags_by_assumption: dict[str, list] = {}
    for tag in interview.assumption_tags:
        tags_by_assumption.setdefault(tag.assumption_id, []).append(tag)

    result: list[Assumption] = []
    for assumption in assumptions:
        tags = tags_by_assumption.get(assumption.id)
        if not tags:
            result.append(assumption)
            continue
        confidence = assumption.confidence
        evidence = list(assumption.evidence)
        for tag in tags:
            confidence = _clamp_rating(confidence + tag.confidence_change)
            evidence.append(
                f"Interview {interview.date.isoformat()}: "
                f"{ValidationEffect(tag.validation_effect).value} ({tag.quote or 'No quote'})",
            )
        updated = update_ratings(assumption, confidence=confidence, now=now)
        result.append(replace(
            updated,
            evidence=tuple(evidence),
            interview_count=assumption.interview_count + 1,
            last_tested_date=interview.date,
        ))
    return result


def recount_interviews(
    assumptions: Sequence[Assumption], interviews: Sequence[Interview],
) -> list[Assumption]:
    """Rebuild the advisory interview_count cache from the interviews' tags."""
    index = EvidenceIndex(interviews)
    result = []
    for assumption in assumptions:
        count = len(index.interview_ids(assumption.id))
        if count != assumption.interview_count:
            assumption = replace(assumption, interview_count=count)
        result.append(assumption)
    return result


def remove_assumption(
    assumptions: Sequence[Assumption],
    interviews: Sequence[Interview],
    assumption_id: str,
) -> tuple[list[Assumption], list[Interview]]:
    """Delete an assumption and strip dangling tags from interviews."""
    remaining = [a for a in assumptions if a.id != assumption_id]
    cleaned = []
    for interview in interviews:
        if any(t.assumption_id == assumption_id for t in interview.assumption_tags):
            interview = replace(
                interview,
                assumption_tags=tuple(
                    t for t in interview.assumption_tags if t.assumption_id != assumption_id
                ),
            )
        cleaned.append(interview)
    return remaining, cleaned
