"""Assumption Lifecycle: tests for creation, transitions and interview effects.

Tests cover:
    - create_assumption derives stage, risk score and priority
    - update_ratings recomputes risk and priority
    - Status machine allows only listed transitions
    - accept_suggestion requires an eligible suggestion
    - apply_interview_tags nudges confidence with clamping and appends evidence
    - recount_interviews and remove_assumption keep tags and counts consistent
"""

from datetime import date, datetime, timezone

import pytest

from founder_discovery.core.assumption_lifecycle import (
    accept_suggestion,
    add_evidence,
    apply_interview_tags,
    can_transition,
    create_assumption,
    recount_interviews,
    remove_assumption,
    transition_status,
    update_ratings,
)
from founder_discovery.core.domain_types import (
    AssumptionStatus, AssumptionType, CanvasArea, PriorityLevel,
    ValidationEffect, ValidationStage,
)
from founder_discovery.core.entities import AssumptionTag, Interview
from founder_discovery.core.errors import (
    InvalidStatusTransitionError, RatingOutOfRangeError,
)
from founder_discovery.core.validation_eligibility import ValidationEligibility

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _new(aid="a1", area=CanvasArea.PROBLEM, confidence=3, importance=3):
    return create_assumption(
        aid, AssumptionType.PROBLEM, "Founders skip interviews", area,
        confidence=confidence, importance=importance, now=NOW,
    )


def _interview(iid, *tags, day=1) -> Interview:
    return Interview(
        id=iid, segment_name="founders", date=date(2026, 3, day),
        assumption_tags=tuple(tags),
    )


# ─── create / update ─────────────────────────────────────────────

def test_create_derives_stage_and_scores():
    a = _new(area=CanvasArea.REVENUE_STREAMS, confidence=2, importance=5)
    assert a.status == AssumptionStatus.UNTESTED
    assert a.validation_stage == ValidationStage.BUSINESS_MODEL
    assert a.risk_score == 20
    assert a.priority == PriorityLevel.HIGH
    assert a.created == NOW
    assert a.evidence == ()


def test_create_keeps_explicit_stage():
    a = create_assumption(
        "a1", AssumptionType.SOLUTION, "x", CanvasArea.SOLUTION,
        validation_stage=ValidationStage.CUSTOMER_PROBLEM,
    )
    assert a.validation_stage == ValidationStage.CUSTOMER_PROBLEM


def test_create_rejects_out_of_range_rating():
    with pytest.raises(RatingOutOfRangeError):
        _new(confidence=0)


def test_update_ratings_recomputes_risk_and_priority():
    a = update_ratings(_new(), confidence=4, importance=4, now=NOW)
    assert a.risk_score == 8
    assert a.priority == PriorityLevel.MEDIUM


def test_update_ratings_keeps_unspecified_rating():
    a = update_ratings(_new(confidence=2, importance=5), confidence=5)
    assert a.importance == 5
    assert a.risk_score == 5
    assert a.priority == PriorityLevel.LOW


def test_add_evidence_appends():
    a = add_evidence(add_evidence(_new(), "first"), "second")
    assert a.evidence == ("first", "second")


# ─── Status machine ──────────────────────────────────────────────

@pytest.mark.parametrize("current,requested,allowed", [
    (AssumptionStatus.UNTESTED, AssumptionStatus.TESTING, True),
    (AssumptionStatus.UNTESTED, AssumptionStatus.VALIDATED, False),
    (AssumptionStatus.TESTING, AssumptionStatus.VALIDATED, True),
    (AssumptionStatus.TESTING, AssumptionStatus.INVALIDATED, True),
    (AssumptionStatus.TESTING, AssumptionStatus.UNTESTED, True),
    (AssumptionStatus.VALIDATED, AssumptionStatus.TESTING, True),
    (AssumptionStatus.VALIDATED, AssumptionStatus.INVALIDATED, False),
    (AssumptionStatus.INVALIDATED, AssumptionStatus.TESTING, True),
    (AssumptionStatus.TESTING, AssumptionStatus.TESTING, False),
])
def test_transition_table(current, requested, allowed):
    assert can_transition(current, requested) is allowed


def test_invalid_transition_raises():
    with pytest.raises(InvalidStatusTransitionError) as exc:
        transition_status(_new(), AssumptionStatus.VALIDATED)
    assert exc.value.http_status == 409
    assert exc.value.current == "untested"
    assert exc.value.requested == "validated"


def test_transition_returns_new_snapshot():
    original = _new()
    moved = transition_status(original, AssumptionStatus.TESTING, NOW)
    assert moved.status == AssumptionStatus.TESTING
    assert original.status == AssumptionStatus.UNTESTED


# ─── accept_suggestion ───────────────────────────────────────────

def _eligibility(can_validate, status):
    return ValidationEligibility(can_validate=can_validate, suggested_status=status, reason="")


def test_accept_moves_untested_through_testing():
    a = accept_suggestion(_new(), _eligibility(True, AssumptionStatus.VALIDATED))
    assert a.status == AssumptionStatus.VALIDATED


def test_accept_invalidation_from_testing():
    testing = transition_status(_new(), AssumptionStatus.TESTING)
    a = accept_suggestion(testing, _eligibility(True, AssumptionStatus.INVALIDATED))
    assert a.status == AssumptionStatus.INVALIDATED


def test_accept_rejects_ineligible_suggestion():
    with pytest.raises(InvalidStatusTransitionError):
        accept_suggestion(_new(), _eligibility(False, AssumptionStatus.TESTING))


# ─── apply_interview_tags ────────────────────────────────────────

def test_tags_nudge_confidence_and_append_evidence():
    a = _new(confidence=3, importance=5)
    interview = _interview(
        "i1", AssumptionTag("a1", ValidationEffect.SUPPORTS, 1, "We lose a week per hire"),
        day=9,
    )
    [updated] = apply_interview_tags([a], interview, NOW)
    assert updated.confidence == 4
    assert updated.risk_score == 10
    assert updated.priority == PriorityLevel.MEDIUM
    assert updated.interview_count == 1
    assert updated.last_tested_date == date(2026, 3, 9)
    assert updated.evidence == ("Interview 2026-03-09: supports (We lose a week per hire)",)
    assert updated.status == AssumptionStatus.UNTESTED


def test_confidence_result_is_clamped():
    high = _new("hi", confidence=5)
    low = _new("lo", confidence=1)
    interview = _interview(
        "i1",
        AssumptionTag("hi", ValidationEffect.SUPPORTS, 2),
        AssumptionTag("lo", ValidationEffect.CONTRADICTS, -2),
    )
    hi, lo = apply_interview_tags([high, low], interview)
    assert hi.confidence == 5
    assert lo.confidence == 1


def test_duplicate_tags_count_interview_once():
    interview = _interview(
        "i1",
        AssumptionTag("a1", ValidationEffect.SUPPORTS, 1),
        AssumptionTag("a1", ValidationEffect.NEUTRAL, 0),
    )
    [updated] = apply_interview_tags([_new()], interview)
    assert updated.interview_count == 1
    assert updated.confidence == 4
    assert len(updated.evidence) == 2
    assert updated.evidence[1].endswith("neutral (No quote)")


def test_untagged_assumptions_are_untouched():
    a, b = _new("a1"), _new("b1")
    interview = _interview("i1", AssumptionTag("a1", ValidationEffect.SUPPORTS))
    _, untouched = apply_interview_tags([a, b], interview)
    assert untouched is b


# ─── recount / remove ────────────────────────────────────────────

def test_recount_interviews_rebuilds_cache():
    a = _new()
    interviews = [
        _interview("i1", AssumptionTag("a1")),
        _interview("i2", AssumptionTag("a1"), AssumptionTag("a1")),
    ]
    [recounted] = recount_interviews([a], interviews)
    assert recounted.interview_count == 2


def test_remove_assumption_strips_tags():
    a, b = _new("a1"), _new("b1")
    tagged = _interview("i1", AssumptionTag("a1"), AssumptionTag("b1"))
    untagged = _interview("i2", AssumptionTag("b1"))
    remaining, interviews = remove_assumption([a, b], [tagged, untagged], "a1")
    assert [x.id for x in remaining] == ["b1"]
    assert [t.assumption_id for t in interviews[0].assumption_tags] == ["b1"]
    assert interviews[1] is untagged
