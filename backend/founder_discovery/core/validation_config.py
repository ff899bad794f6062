"""Validation Configuration: thresholds for evidence and stage graduation.

Invariants:
    - ValidationConfig is frozen; overrides produce a new instance
    - The engine never reads the environment: callers pass a config explicitly
    - with_overrides() rejects unknown keys instead of ignoring them
    - check_config() returns an error dict for inconsistent thresholds, None when sound

Design Decisions:
    - Explicit struct passed by the caller; the environment overlay lives in the
      shell's Settings (config.py), project overrides are layered on top there
"""

from dataclasses import dataclass, fields, replace

from founder_discovery.core.domain_types import ValidationStage


@dataclass(frozen=True)
class ValidationConfig:
    """Overridable thresholds. Defaults match the guided discovery course."""

    # Minimum tagged interviews before an assumption can be judged
    minimum_interviews_for_validation: int = 3

    # Stage 1 assumptions also need this many beachhead-segment interviews
    minimum_beachhead_interviews: int = 5

    # Share of supporting tags needed to validate / at or below which to invalidate
    minimum_support_ratio: float = 0.6
    maximum_support_ratio_for_invalidation: float = 0.3

    # Confidence thresholds on the 1-5 scale
    confidence_to_validate: int = 4
    confidence_to_invalidate: int = 2

    stage1_min_interviews: int = 5
    stage2_min_interviews: int = 5
    stage3_min_interviews: int = 3

    stage1_min_confidence: float = 4
    stage1_max_invalidated: int = 0
    stage2_min_confidence: float = 4
    stage2_max_invalidated: int = 1
    stage3_min_confidence: float = 3
    stage3_max_invalidated: int = 2

    def with_overrides(self, **overrides: object) -> "ValidationConfig":
        """Return a copy with the given fields replaced. Unknown keys raise KeyError."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise KeyError(f"Unknown validation config keys: {sorted(unknown)}")
        return replace(self, **overrides)

    def min_interviews(self, stage: ValidationStage) -> int:
        return getattr(self, f"stage{int(stage)}_min_interviews")

    def min_confidence(self, stage: ValidationStage) -> float:
        return getattr(self, f"stage{int(stage)}_min_confidence")

    def max_invalidated(self, stage: ValidationStage) -> int:
        return getattr(self, f"stage{int(stage)}_max_invalidated")


DEFAULT_VALIDATION_CONFIG = ValidationConfig()


def check_config(config: ValidationConfig) -> dict | None:
    """Reject threshold combinations that make the eligibility rules contradictory."""
    problems: list[str] = []
    if config.minimum_interviews_for_validation < 1:
        problems.append("minimum_interviews_for_validation must be >= 1")
    if config.minimum_beachhead_interviews < 0:
        problems.append("minimum_beachhead_interviews must be >= 0")
    if not 0.0 <= config.maximum_support_ratio_for_invalidation <= 1.0:
        problems.append("maximum_support_ratio_for_invalidation must be within 0..1")
    if not 0.0 <= config.minimum_support_ratio <= 1.0:
        problems.append("minimum_support_ratio must be within 0..1")
    if config.maximum_support_ratio_for_invalidation >= config.minimum_support_ratio:
        problems.append(
            "maximum_support_ratio_for_invalidation must be below minimum_support_ratio",
        )
    for stage in ValidationStage:
        if config.min_interviews(stage) < 1:
            problems.append(f"stage{int(stage)}_min_interviews must be >= 1")
        if config.max_invalidated(stage) < 0:
            problems.append(f"stage{int(stage)}_max_invalidated must be >= 0")
    if problems:
        return {
            "status": "error",
            "error_code": "INVALID_VALIDATION_CONFIG",
            "message": "Invalid validation config: " + "; ".join(problems),
            "problems": problems,
        }
    return None
