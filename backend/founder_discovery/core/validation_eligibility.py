"""Validation Eligibility: can an assumption's evidence justify a status change?

Invariants:
    - All functions are PURE: the assumption is never modified, only a suggestion is returned
    - Checks run in order and short-circuit: tag count -> stage-1 beachhead -> support ratio
    - Never suggests validated/invalidated with fewer tags than minimum_interviews_for_validation
    - validated and invalidated are mutually exclusive; invalidation always sets suggest_pivot
    - support_ratio = supports / all tags (neutral tags count in the denominator)
    - A malformed assumption or interview raises InputValidationError, never a bare ValueError
"""

from dataclasses import dataclass
from typing import Sequence

from founder_discovery.core.domain_types import (
    AssumptionStatus, ValidationEffect, ValidationStage,
)
from founder_discovery.core.entities import Assumption, Interview
from founder_discovery.core.enforce_inputs import require_valid_snapshot
from founder_discovery.core.evidence_index import EvidenceIndex
from founder_discovery.core.scoring import round_half_up
from founder_discovery.core.interview_requirements import count_beachhead_interviews
from founder_discovery.core.stages import assumption_stage
from founder_discovery.core.validation_config import (
    DEFAULT_VALIDATION_CONFIG, ValidationConfig,
)


@dataclass(frozen=True)
class ValidationEligibility:
    can_validate: bool
    suggested_status: AssumptionStatus
    reason: str
    support_ratio: float | None = None
    support_count: int | None = None
    contradict_count: int | None = None
    total_interviews: int | None = None
    suggest_pivot: bool = False


def _plural(count: int, noun: str) -> str:
    return f"{count} more {noun}{'s' if count > 1 else ''}"


def check_validation_eligibility(
    assumption: Assumption,
    interviews: Sequence[Interview],
    beachhead_segment_name: str | None,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    index: EvidenceIndex | None = None,
) -> ValidationEligibility:
    """Suggest a status for one assumption from its tagged interviews.

    Raises InputValidationError when the assumption or an interview is malformed.
    """
    require_valid_snapshot([assumption], interviews)
    index = index if index is not None else EvidenceIndex(interviews)
    tags = index.tags(assumption.id)
    total = len(tags)

    if total < config.minimum_interviews_for_validation:
        needed = config.minimum_interviews_for_validation - total
        return ValidationEligibility(
            can_validate=False,
            suggested_status=(
                AssumptionStatus.TESTING if total > 0 else AssumptionStatus.UNTESTED
            ),
            reason=f"Need {_plural(needed, 'interview')} addressing this assumption",
            total_interviews=total,
        )

    if assumption_stage(assumption) == ValidationStage.CUSTOMER_PROBLEM:
        beachhead = count_beachhead_interviews(interviews, beachhead_segment_name)
        if beachhead < config.minimum_beachhead_interviews:
            needed = config.minimum_beachhead_interviews - beachhead
            return ValidationEligibility(
                can_validate=False,
                suggested_status=AssumptionStatus.TESTING,
                reason=(
                    f"Stage 1 requires {_plural(needed, 'beachhead interview')} "
                    f"({beachhead} of {config.minimum_beachhead_interviews})"
                ),
                total_interviews=total,
            )

    supports = sum(1 for t in tags if t.validation_effect == ValidationEffect.SUPPORTS)
    contradicts = sum(1 for t in tags if t.validation_effect == ValidationEffect.CONTRADICTS)
    ratio = supports / total
    percent = round_half_up(ratio * 100)
    counts = dict(
        support_ratio=ratio,
        support_count=supports,
        contradict_count=contradicts,
        total_interviews=total,
    )

    if ratio >= config.minimum_support_ratio:
        return ValidationEligibility(
            can_validate=True,
            suggested_status=AssumptionStatus.VALIDATED,
            reason=f"{percent}% of {total} interviews support this assumption",
            **counts,
        )

    if ratio <= config.maximum_support_ratio_for_invalidation:
        return ValidationEligibility(
            can_validate=True,
            suggested_status=AssumptionStatus.INVALIDATED,
            reason=f"Only {percent}% of {total} interviews support this assumption",
            suggest_pivot=True,
            **counts,
        )

    return ValidationEligibility(
        can_validate=False,
        suggested_status=AssumptionStatus.TESTING,
        reason=f"Mixed evidence ({percent}% support) - need more interviews for clarity",
        **counts,
    )


def validation_suggestion_message(eligibility: ValidationEligibility) -> str:
    """One-line prompt shown next to the assumption."""
    if eligibility.can_validate:
        percent = round_half_up((eligibility.support_ratio or 0) * 100)
        if eligibility.suggested_status == AssumptionStatus.VALIDATED:
            return f"Strong evidence ({percent}% support). Consider marking as validated."
        if eligibility.suggested_status == AssumptionStatus.INVALIDATED:
            return (
                f"Weak evidence ({percent}% support). "
                "Consider pivoting or revising this assumption."
            )
    return eligibility.reason
