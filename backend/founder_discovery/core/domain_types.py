"""Domain Types: enums and value types shared by the discovery engine.

Invariants:
    - CanvasArea has exactly 11 members; values keep the canvas wire names
    - ValidationStage is an int enum (1, 2, 3) so stages compare and order numerically
    - Ratings (confidence, importance, pain, access, willingness) live in 1-5
    - Risk scores live in 1-25 ((6 - 5) * 1 up to (6 - 1) * 5)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - NewType for identifiers: zero runtime cost, ids stay opaque strings
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AssumptionId = NewType("AssumptionId", str)
InterviewId = NewType("InterviewId", str)
ProjectId = NewType("ProjectId", str)


# ─── Value Ranges ────────────────────────────────────────────────

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_CONFIDENCE = 3   # "medium"
DEFAULT_IMPORTANCE = 3

MIN_RISK_SCORE = 1       # (6 - 5) * 1
MAX_RISK_SCORE = 25      # (6 - 1) * 5

HIGH_PRIORITY_THRESHOLD = 15
MEDIUM_PRIORITY_THRESHOLD = 8

MIN_CONFIDENCE_CHANGE = -2
MAX_CONFIDENCE_CHANGE = 2


# ─── Enums ───────────────────────────────────────────────────────

class AssumptionType(str, Enum):
    CUSTOMER = "customer"
    PROBLEM = "problem"
    SOLUTION = "solution"


class AssumptionStatus(str, Enum):
    """Assumption lifecycle states. Changed only by explicit user action."""
    UNTESTED = "untested"
    TESTING = "testing"
    VALIDATED = "validated"
    INVALIDATED = "invalidated"


class CanvasArea(str, Enum):
    """The 11 lean business model canvas areas."""
    PROBLEM = "problem"
    EXISTING_ALTERNATIVES = "existingAlternatives"
    CUSTOMER_SEGMENTS = "customerSegments"
    EARLY_ADOPTERS = "earlyAdopters"
    SOLUTION = "solution"
    UNIQUE_VALUE_PROPOSITION = "uniqueValueProposition"
    CHANNELS = "channels"
    REVENUE_STREAMS = "revenueStreams"
    COST_STRUCTURE = "costStructure"
    KEY_METRICS = "keyMetrics"
    UNFAIR_ADVANTAGE = "unfairAdvantage"


class ValidationStage(IntEnum):
    CUSTOMER_PROBLEM = 1
    PROBLEM_SOLUTION = 2
    BUSINESS_MODEL = 3


class ValidationEffect(str, Enum):
    """How a single interview bears on an assumption."""
    SUPPORTS = "supports"
    CONTRADICTS = "contradicts"
    NEUTRAL = "neutral"


class PriorityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IntervieweeType(str, Enum):
    CUSTOMER = "customer"
    PARTNER = "partner"
    REGULATOR = "regulator"
    EXPERT = "expert"
    OTHER = "other"


class InterviewStatus(str, Enum):
    DRAFT = "draft"
    COMPLETED = "completed"
