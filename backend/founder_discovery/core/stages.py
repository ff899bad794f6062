"""Validation Stages: the three-stage table and the canvas-area mapping.

Invariants:
    - AREA_STAGE is total: every CanvasArea maps to exactly one stage
    - Stage text (name, question, description, areas) is static; numeric
      thresholds come from ValidationConfig so projects can override them
    - assumption_stage() resolves an absent explicit stage through the canvas area
    - belongs_to_stage() is the union rule: explicit stage OR canvas area membership
"""

from dataclasses import dataclass

from founder_discovery.core.domain_types import CanvasArea, ValidationStage
from founder_discovery.core.entities import Assumption
from founder_discovery.core.validation_config import (
    DEFAULT_VALIDATION_CONFIG, ValidationConfig,
)


@dataclass(frozen=True)
class GraduationCriteria:
    min_confidence: float
    max_invalidated: int


@dataclass(frozen=True)
class StageDefinition:
    """One row of the stage table, thresholds resolved against a config."""
    stage: ValidationStage
    name: str
    question: str
    description: str
    areas: frozenset[CanvasArea]
    minimum_interviews: int
    graduation_criteria: GraduationCriteria


_STAGE_TEXT: dict[ValidationStage, tuple[str, str, str, tuple[CanvasArea, ...]]] = {
    ValidationStage.CUSTOMER_PROBLEM: (
        "Customer-Problem Fit",
        "Does a specific customer segment really have this problem?",
        "Validate who the customer is and that the problem is painful enough to solve.",
        (CanvasArea.PROBLEM, CanvasArea.CUSTOMER_SEGMENTS),
    ),
    ValidationStage.PROBLEM_SOLUTION: (
        "Problem-Solution Fit",
        "Does the proposed solution solve the problem better than today's alternatives?",
        "Validate alternatives, early adopters, the solution and its value proposition.",
        (
            CanvasArea.EXISTING_ALTERNATIVES,
            CanvasArea.EARLY_ADOPTERS,
            CanvasArea.SOLUTION,
            CanvasArea.UNIQUE_VALUE_PROPOSITION,
        ),
    ),
    ValidationStage.BUSINESS_MODEL: (
        "Business Model Viability",
        "Can this become a sustainable business?",
        "Validate channels, revenue, costs, key metrics and the unfair advantage.",
        (
            CanvasArea.CHANNELS,
            CanvasArea.REVENUE_STREAMS,
            CanvasArea.COST_STRUCTURE,
            CanvasArea.KEY_METRICS,
            CanvasArea.UNFAIR_ADVANTAGE,
        ),
    ),
}

AREA_STAGE: dict[CanvasArea, ValidationStage] = {
    area: stage
    for stage, (_, _, _, areas) in _STAGE_TEXT.items()
    for area in areas
}


def stage_for_area(area: CanvasArea) -> ValidationStage:
    """Fixed canvas-area -> stage mapping. Raises ValueError for unknown areas."""
    return AREA_STAGE[CanvasArea(area)]


def get_stage_definition(
    stage: ValidationStage, config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> StageDefinition:
    stage = ValidationStage(stage)
    name, question, description, areas = _STAGE_TEXT[stage]
    return StageDefinition(
        stage=stage,
        name=name,
        question=question,
        description=description,
        areas=frozenset(areas),
        minimum_interviews=config.min_interviews(stage),
        graduation_criteria=GraduationCriteria(
            min_confidence=config.min_confidence(stage),
            max_invalidated=config.max_invalidated(stage),
        ),
    )


def stage_table(
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> dict[ValidationStage, StageDefinition]:
    return {stage: get_stage_definition(stage, config) for stage in ValidationStage}


def assumption_stage(assumption: Assumption) -> ValidationStage:
    """Explicit stage when set, otherwise derived from the canvas area."""
    if assumption.validation_stage is not None:
        return ValidationStage(assumption.validation_stage)
    return stage_for_area(assumption.canvas_area)


def belongs_to_stage(assumption: Assumption, definition: StageDefinition) -> bool:
    """Union selection: explicit stage match OR canvas area owned by the stage.

    An assumption whose explicit stage contradicts its canvas area belongs to
    both stages; enforce_inputs.check_stage_consistency flags that case.
    """
    return (
        assumption.validation_stage == definition.stage
        or assumption.canvas_area in definition.areas
    )
