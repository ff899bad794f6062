"""Interview Requirements: tests for beachhead matching, sufficiency and priorities.

Tests cover:
    - Segment matching is case- and whitespace-insensitive; explicit flag wins
    - stage1_interviews counts distinct interviews tagging stage-1 assumptions
    - overall_progress is the mean of two capped ratios
    - prioritized_assumptions_for_interview respects stage unlocking and the limit
    - Malformed snapshots raise instead of being counted
"""

from dataclasses import replace
from datetime import date

import pytest

from founder_discovery.core.domain_types import (
    AssumptionStatus, AssumptionType, CanvasArea, ValidationEffect, ValidationStage,
)
from founder_discovery.core.entities import Assumption, AssumptionTag, Interview
from founder_discovery.core.errors import InputValidationError
from founder_discovery.core.interview_requirements import (
    calculate_interview_requirements,
    count_beachhead_interviews,
    matches_beachhead,
    normalize_segment_name,
    prioritized_assumptions_for_interview,
)
from founder_discovery.core.stage_evaluation import evaluate_all_stages

BEACHHEAD = "First-time founders"


def _assumption(aid, area=CanvasArea.PROBLEM, status=AssumptionStatus.TESTING,
                confidence=4, importance=3, stage=None) -> Assumption:
    return Assumption(
        id=aid, type=AssumptionType.PROBLEM, description=aid, canvas_area=area,
        status=status, confidence=confidence, importance=importance,
        validation_stage=stage,
    )


def _interview(iid, segment=BEACHHEAD, tags=(), flag=None) -> Interview:
    return Interview(
        id=iid, segment_name=segment, date=date(2026, 2, 1),
        assumption_tags=tuple(AssumptionTag(t, ValidationEffect.SUPPORTS) for t in tags),
        matches_beachhead=flag,
    )


# ─── Beachhead matching ──────────────────────────────────────────

def test_normalize_segment_name():
    assert normalize_segment_name("  First-Time   Founders ") == "first-time founders"
    assert normalize_segment_name(None) == ""


def test_matching_ignores_case_and_spacing():
    assert matches_beachhead(_interview("i", segment="first-time  FOUNDERS"), BEACHHEAD)
    assert not matches_beachhead(_interview("i", segment="professors"), BEACHHEAD)


def test_explicit_flag_wins_over_name():
    assert not matches_beachhead(_interview("i", flag=False), BEACHHEAD)
    assert matches_beachhead(_interview("i", segment="professors", flag=True), BEACHHEAD)


def test_blank_beachhead_matches_everything():
    assert matches_beachhead(_interview("i", segment="professors"), None)
    assert matches_beachhead(_interview("i", segment="professors"), "   ")


def test_count_beachhead_interviews():
    interviews = [
        _interview("a"), _interview("b", segment="professors"),
        _interview("c", segment="first-time founders"),
    ]
    assert count_beachhead_interviews(interviews, BEACHHEAD) == 2


# ─── calculate_interview_requirements ────────────────────────────

def test_requirements_for_empty_project():
    result = calculate_interview_requirements([], [], BEACHHEAD)
    assert result.stage1_interviews == 0
    assert result.stage1_required == 5
    assert result.beachhead_required == 5
    assert result.total_interviews == 0
    assert result.overall_progress == 0
    assert not result.stage1_complete
    assert not result.beachhead_complete


def test_stage1_interviews_are_distinct_and_stage_scoped():
    assumptions = [
        _assumption("p0"),
        _assumption("p1", area=CanvasArea.CUSTOMER_SEGMENTS),
        _assumption("s0", area=CanvasArea.SOLUTION),
    ]
    interviews = [
        _interview("i0", tags=("p0", "p1")),
        _interview("i1", tags=("s0",)),
        _interview("i2", tags=("p1",), segment="professors"),
    ]
    result = calculate_interview_requirements(interviews, assumptions, BEACHHEAD)
    assert result.stage1_interviews == 2
    assert result.beachhead_interviews == 2
    assert result.total_interviews == 3
    # (2/5 + 2/5) / 2 = 0.4
    assert result.overall_progress == 40


def test_stage1_uses_explicit_stage_when_set():
    assumptions = [_assumption("x", area=CanvasArea.SOLUTION, stage=ValidationStage.CUSTOMER_PROBLEM)]
    interviews = [_interview("i0", tags=("x",))]
    result = calculate_interview_requirements(interviews, assumptions, BEACHHEAD)
    assert result.stage1_interviews == 1


def test_progress_ratios_are_capped():
    assumptions = [_assumption("p0")]
    interviews = [_interview(f"i{n}", tags=("p0",)) for n in range(8)]
    result = calculate_interview_requirements(interviews, assumptions, "professors")
    assert result.stage1_complete is True
    assert result.beachhead_interviews == 0
    # min(8/5, 1) = 1 and 0/5 = 0 -> 50, not 80
    assert result.overall_progress == 50


def test_requirements_complete():
    assumptions = [_assumption("p0")]
    interviews = [_interview(f"i{n}", tags=("p0",)) for n in range(5)]
    result = calculate_interview_requirements(interviews, assumptions, BEACHHEAD)
    assert result.stage1_complete and result.beachhead_complete
    assert result.overall_progress == 100


# ─── prioritized_assumptions_for_interview ───────────────────────

def test_priorities_only_stage1_while_stage2_locked():
    assumptions = [
        _assumption("p-low", importance=1),
        _assumption("p-high", confidence=1, importance=5),
        _assumption("p-done", status=AssumptionStatus.VALIDATED),
        _assumption("s0", area=CanvasArea.SOLUTION),
    ]
    statuses = evaluate_all_stages(assumptions, [])
    result = prioritized_assumptions_for_interview(assumptions, statuses)
    assert [a.id for a in result.recommended] == ["p-high", "p-low"]
    assert [a.id for a in result.by_stage[ValidationStage.PROBLEM_SOLUTION]] == ["s0"]


def test_priorities_include_stage2_after_stage1_graduates():
    stage1 = [_assumption(f"p{n}", status=AssumptionStatus.VALIDATED) for n in range(5)]
    stage2 = [_assumption("s0", area=CanvasArea.SOLUTION, status=AssumptionStatus.UNTESTED)]
    interviews = [_interview(f"i{n}", tags=(f"p{n}",)) for n in range(5)]
    statuses = evaluate_all_stages(stage1 + stage2, interviews)
    result = prioritized_assumptions_for_interview(stage1 + stage2, statuses)
    assert [a.id for a in result.recommended] == ["s0"]


def test_priorities_respect_limit():
    assumptions = [_assumption(f"p{n}") for n in range(8)]
    statuses = evaluate_all_stages(assumptions, [])
    assert len(prioritized_assumptions_for_interview(assumptions, statuses).recommended) == 5
    assert len(prioritized_assumptions_for_interview(assumptions, statuses, limit=2).recommended) == 2


def test_requirements_reject_out_of_range_interview_rating():
    interview = replace(_interview("i0", tags=("p0",)), problem_importance=0)
    with pytest.raises(InputValidationError) as exc:
        calculate_interview_requirements([interview], [_assumption("p0")], BEACHHEAD)
    assert exc.value.code == "RATING_OUT_OF_RANGE"
    assert exc.value.error["field"] == "problem_importance"


def test_priorities_reject_out_of_range_confidence():
    valid = [_assumption("p0")]
    statuses = evaluate_all_stages(valid, [])
    with pytest.raises(InputValidationError):
        prioritized_assumptions_for_interview(valid + [_assumption("p1", confidence=9)], statuses)
