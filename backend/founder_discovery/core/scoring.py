"""Scoring Primitives: risk score, priority tier, beachhead readiness.

Invariants:
    - risk = (6 - confidence) * importance, confidence and importance in 1..5, result in 1..25
    - priority: high >= 15, medium >= 8, low otherwise (lower bounds inclusive)
    - Out-of-range inputs raise RatingOutOfRangeError; nothing is clamped
    - resolve_risk_score() recomputes when the stored score is absent or not a valid number
    - beachhead is_ready = pain >= 4 AND access >= 4, independent of the numeric score
    - round_half_up() rounds .5 away from zero for display numbers (percentages, averages)
"""

import math
from dataclasses import dataclass
from typing import Iterable, Protocol

from founder_discovery.core.domain_types import (
    HIGH_PRIORITY_THRESHOLD,
    MAX_RATING,
    MAX_RISK_SCORE,
    MEDIUM_PRIORITY_THRESHOLD,
    MIN_RATING,
    MIN_RISK_SCORE,
    PriorityLevel,
)
from founder_discovery.core.entities import Assumption
from founder_discovery.core.errors import RatingOutOfRangeError

READY_PAIN = 4
READY_ACCESS = 4
MAX_BEACHHEAD_SCORE = MAX_RATING * 2 + MAX_RATING + MAX_RATING


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (4.25 -> 4.3, 12.5 -> 13), unlike round()'s banker's rounding.

    Returns an int when digits is 0. Inputs are non-negative display values.
    """
    scale = 10 ** digits
    rounded = math.floor(value * scale + 0.5)
    return int(rounded) if digits == 0 else rounded / scale


def require_rating(name: str, value: object, low: int = MIN_RATING, high: int = MAX_RATING) -> int:
    """Return value if it is an int within [low, high], else raise."""
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise RatingOutOfRangeError(name, value, low, high)
    return value


def compute_risk_score(confidence: int, importance: int) -> int:
    """Low confidence + high importance = high risk."""
    require_rating("confidence", confidence)
    require_rating("importance", importance)
    return (6 - confidence) * importance


def compute_priority(risk_score: int) -> PriorityLevel:
    require_rating("risk_score", risk_score, MIN_RISK_SCORE, MAX_RISK_SCORE)
    if risk_score >= HIGH_PRIORITY_THRESHOLD:
        return PriorityLevel.HIGH
    if risk_score >= MEDIUM_PRIORITY_THRESHOLD:
        return PriorityLevel.MEDIUM
    return PriorityLevel.LOW


def _is_valid_stored_score(value: object) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, float) and (math.isnan(value) or not value.is_integer()):
        return False
    if not isinstance(value, (int, float)):
        return False
    return MIN_RISK_SCORE <= value <= MAX_RISK_SCORE


def resolve_risk_score(assumption: Assumption) -> int:
    """Stored score when present and valid, computed from the ratings otherwise."""
    if _is_valid_stored_score(assumption.risk_score):
        return int(assumption.risk_score)
    return compute_risk_score(assumption.confidence, assumption.importance)


def resolve_priority(assumption: Assumption) -> PriorityLevel:
    if assumption.priority is not None:
        return PriorityLevel(assumption.priority)
    return compute_priority(resolve_risk_score(assumption))


# ─── Beachhead readiness ─────────────────────────────────────────

@dataclass(frozen=True)
class BeachheadReadiness:
    score: int
    max_score: int
    is_ready: bool
    guidance: str


class SegmentRating(Protocol):
    """Anything carrying pain / access / willingness ratings."""
    name: str
    pain: int
    access: int
    willingness: int


def beachhead_readiness(pain: int, access: int, willingness: int) -> BeachheadReadiness:
    """Pain counts double; readiness needs acute pain AND reachable customers."""
    require_rating("pain", pain)
    require_rating("access", access)
    require_rating("willingness", willingness)
    score = pain * 2 + access + willingness
    is_ready = pain >= READY_PAIN and access >= READY_ACCESS

    if is_ready:
        guidance = "Great beachhead candidate! High pain + good access."
    elif pain < READY_PAIN:
        guidance = "Pain may not be acute enough. Look for more desperate customers."
    else:
        guidance = "Good pain level, but hard to reach. Consider how to improve access."

    return BeachheadReadiness(
        score=score, max_score=MAX_BEACHHEAD_SCORE, is_ready=is_ready, guidance=guidance,
    )


def recommend_beachhead(segments: Iterable[SegmentRating]) -> SegmentRating | None:
    """Highest readiness score wins; first listed wins ties."""
    best: SegmentRating | None = None
    best_score = -1
    for segment in segments:
        score = beachhead_readiness(segment.pain, segment.access, segment.willingness).score
        if score > best_score:
            best, best_score = segment, score
    return best
