"""Input Enforcement: rejects malformed snapshots before they reach the engine.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return error dict on violation, None on success
    - Malformed input is rejected, never clamped (clamping would hide data-integrity bugs)
    - validate_snapshot chains all checks; first error wins
    - require_valid_snapshot is the engine entry guard: same checks, raises InputValidationError

Design Decisions:
    - Error dicts (not exceptions) so the shell can report them like any other result;
      engine entry points go through require_valid_snapshot and raise instead
    - Stage/area mismatch is reported but does not change the union stage selection
"""

from typing import Iterable

from founder_discovery.core.domain_types import (
    AssumptionStatus,
    CanvasArea,
    MAX_CONFIDENCE_CHANGE,
    MAX_RATING,
    MIN_CONFIDENCE_CHANGE,
    MIN_RATING,
    ValidationStage,
)
from founder_discovery.core.entities import Assumption, AssumptionTag, Interview
from founder_discovery.core.errors import InputValidationError
from founder_discovery.core.stages import stage_for_area


def check_rating(name: str, value: object) -> dict | None:
    """1-5 integer scale shared by confidence, importance and interview ratings."""
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        return _error(
            "RATING_OUT_OF_RANGE",
            f"{name} must be an integer between {MIN_RATING} and {MAX_RATING}, got {value!r}.",
            field=name,
        )
    return None


def check_canvas_area(value: object) -> dict | None:
    try:
        CanvasArea(value)
    except ValueError:
        return _error(
            "UNKNOWN_CANVAS_AREA",
            f"Unknown canvas area {value!r}. "
            f"Expected one of: {', '.join(a.value for a in CanvasArea)}.",
            field="canvas_area",
        )
    return None


def check_status(value: object) -> dict | None:
    try:
        AssumptionStatus(value)
    except ValueError:
        return _error(
            "INVALID_STATUS",
            f"Unknown assumption status {value!r}.",
            field="status",
        )
    return None


def check_stage_consistency(assumption: Assumption) -> dict | None:
    """Explicit stage must agree with the stage owning the canvas area."""
    if assumption.validation_stage is None:
        return None
    expected = stage_for_area(assumption.canvas_area)
    if ValidationStage(assumption.validation_stage) != expected:
        return _error(
            "STAGE_AREA_MISMATCH",
            f"Assumption {assumption.id} is set to Stage {int(assumption.validation_stage)} "
            f"but canvas area '{CanvasArea(assumption.canvas_area).value}' "
            f"belongs to Stage {int(expected)}.",
            field="validation_stage",
        )
    return None


def check_confidence_change(tag: AssumptionTag) -> dict | None:
    value = tag.confidence_change
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not MIN_CONFIDENCE_CHANGE <= value <= MAX_CONFIDENCE_CHANGE
    ):
        return _error(
            "CONFIDENCE_CHANGE_OUT_OF_RANGE",
            f"confidence_change for assumption {tag.assumption_id} must be between "
            f"{MIN_CONFIDENCE_CHANGE} and {MAX_CONFIDENCE_CHANGE}, got {value!r}.",
            field="confidence_change",
        )
    return None


def check_assumption(assumption: Assumption) -> dict | None:
    """Chain per-assumption checks. Stage consistency is advisory and excluded."""
    return (
        check_canvas_area(assumption.canvas_area)
        or check_status(assumption.status)
        or check_rating("confidence", assumption.confidence)
        or check_rating("importance", assumption.importance)
    )


def check_interview(interview: Interview) -> dict | None:
    error = check_rating("problem_importance", interview.problem_importance)
    if error:
        return error
    for tag in interview.assumption_tags:
        error = check_confidence_change(tag)
        if error:
            return error
    return None


def check_tag_targets(interview: Interview, assumption_ids: Iterable[str]) -> dict | None:
    """Every tag must point at an assumption of the same project."""
    known = set(assumption_ids)
    unknown = [t.assumption_id for t in interview.assumption_tags if t.assumption_id not in known]
    if unknown:
        return _error(
            "UNKNOWN_ASSUMPTION",
            f"Interview tags reference unknown assumptions: {', '.join(unknown)}.",
            field="assumption_tags",
            unknown_assumption_ids=unknown,
        )
    return None


def validate_snapshot(
    assumptions: Iterable[Assumption], interviews: Iterable[Interview],
) -> dict | None:
    """Validate a full snapshot before evaluation. Returns first error or None."""
    for assumption in assumptions:
        error = check_assumption(assumption)
        if error:
            return error
    for interview in interviews:
        error = check_interview(interview)
        if error:
            return error
    return None


def require_valid_snapshot(
    assumptions: Iterable[Assumption], interviews: Iterable[Interview],
) -> None:
    """Raise InputValidationError carrying the first error validate_snapshot finds."""
    error = validate_snapshot(assumptions, interviews)
    if error:
        raise InputValidationError(error)


# --- Helper -------------------------------------------------------------------

def _error(code: str, message: str, **extra: object) -> dict:
    """Construct a standard error dict."""
    return {
        "status": "error",
        "error_code": code,
        "message": f"ERROR: {message}",
        **extra,
    }
