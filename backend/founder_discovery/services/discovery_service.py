"""Discovery Service: imperative shell around the pure discovery engine.

Invariants:
    - Every operation loads a fresh snapshot, calls pure core functions, persists the result
    - Stage statuses and eligibility are recomputed per request, never stored
    - Status changes happen only through change_status / accept_suggestion
    - Malformed snapshots raise InputValidationError before evaluation
    - The service commits; repositories only flush

Design Decisions:
    - Project config = Settings.validation_defaults() + project overrides, built per call
    - Interview create applies tag effects once; edits and deletes only recount the
      interview_count cache (confidence nudges are not replayed)
"""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from founder_discovery.core import assumption_lifecycle as lifecycle
from founder_discovery.core.domain_types import (
    AssumptionStatus, AssumptionType, CanvasArea, ValidationStage,
)
from founder_discovery.core.entities import (
    Assumption, AssumptionTag, Interview, Project, StageStatus,
)
from founder_discovery.core.enforce_inputs import (
    check_interview, check_stage_consistency, check_tag_targets, validate_snapshot,
)
from founder_discovery.core.errors import (
    ErrorContext, InputValidationError, ResourceNotFoundError,
)
from founder_discovery.core.evidence_index import (
    EvidenceIndex, EvidenceSummary, summarize_evidence,
)
from founder_discovery.core.interview_requirements import (
    InterviewPriorities, InterviewRequirements,
    calculate_interview_requirements, prioritized_assumptions_for_interview,
)
from founder_discovery.core.repository_protocols import (
    AssumptionRepository, InterviewRepository, ProjectRepository,
)
from founder_discovery.core.stage_evaluation import (
    calculate_overall_progress, evaluate_all_stages, highest_unlocked_stage,
    sorted_assumptions_for_stage,
)
from founder_discovery.core.validation_config import ValidationConfig, check_config
from founder_discovery.core.validation_eligibility import (
    ValidationEligibility, check_validation_eligibility,
)
from founder_discovery.infrastructure.repositories import (
    SqlAssumptionRepository, SqlInterviewRepository, SqlProjectRepository,
)

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class DiscoveryService:
    """Use cases for one request: one DB session, fresh snapshots."""

    def __init__(
        self,
        db: AsyncSession,
        defaults: ValidationConfig,
        projects: ProjectRepository | None = None,
        assumptions: AssumptionRepository | None = None,
        interviews: InterviewRepository | None = None,
    ):
        self._db = db
        self._defaults = defaults
        self.projects = projects or SqlProjectRepository(db)
        self.assumptions = assumptions or SqlAssumptionRepository(db)
        self.interviews = interviews or SqlInterviewRepository(db)

    # ─── Projects ────────────────────────────────────────────────

    def config_for(self, project: Project) -> ValidationConfig:
        return self._build_config(project.validation_overrides, project.id)

    def _build_config(self, overrides: dict, project_id: str | None = None) -> ValidationConfig:
        ctx = ErrorContext(project_id=project_id)
        try:
            config = self._defaults.with_overrides(**overrides)
        except (KeyError, TypeError) as e:
            raise InputValidationError({
                "status": "error",
                "error_code": "INVALID_VALIDATION_CONFIG",
                "message": str(e).strip("'\""),
            }, ctx)
        error = check_config(config)
        if error:
            raise InputValidationError(error, ctx)
        return config

    async def create_project(
        self, name: str, beachhead_segment_name: str | None = None,
        validation_overrides: dict | None = None,
    ) -> Project:
        overrides = dict(validation_overrides or {})
        self._build_config(overrides)
        project = await self.projects.add(Project(
            id=str(uuid.uuid4()), name=name,
            beachhead_segment_name=beachhead_segment_name,
            validation_overrides=overrides,
        ))
        await self._db.commit()
        logger.info("Project created", extra={"project_id": project.id})
        return project

    async def get_project(self, project_id: str) -> Project:
        project = await self.projects.get(project_id)
        if project is None:
            raise ResourceNotFoundError(
                "Project", project_id, ErrorContext(project_id=project_id),
            )
        return project

    async def update_project(
        self, project_id: str, name: str | None = None,
        beachhead_segment_name: Any = _UNSET,
        validation_overrides: dict | None = None,
    ) -> Project:
        project = await self.get_project(project_id)
        changes: dict = {}
        if name is not None:
            changes["name"] = name
        if beachhead_segment_name is not _UNSET:
            changes["beachhead_segment_name"] = beachhead_segment_name
        if validation_overrides is not None:
            self._build_config(validation_overrides, project_id)
            changes["validation_overrides"] = dict(validation_overrides)
        project = await self.projects.save(replace(project, **changes))
        await self._db.commit()
        return project

    async def delete_project(self, project_id: str) -> None:
        await self.get_project(project_id)
        await self.projects.delete(project_id)
        await self._db.commit()
        logger.info("Project deleted", extra={"project_id": project_id})

    async def snapshot(
        self, project_id: str,
    ) -> tuple[Project, list[Assumption], list[Interview]]:
        project = await self.get_project(project_id)
        assumptions = await self.assumptions.list_by_project(project_id)
        interviews = await self.interviews.list_by_project(project_id)
        return project, assumptions, interviews

    # ─── Assumptions ─────────────────────────────────────────────

    async def create_assumption(
        self,
        project_id: str,
        assumption_type: AssumptionType,
        description: str,
        canvas_area: CanvasArea,
        confidence: int,
        importance: int,
        validation_stage: ValidationStage | None = None,
    ) -> tuple[Assumption, dict | None]:
        """Create an untested assumption. Returns it plus a stage/area warning, if any."""
        await self.get_project(project_id)
        assumption = lifecycle.create_assumption(
            str(uuid.uuid4()), assumption_type, description, canvas_area,
            confidence=confidence, importance=importance,
            validation_stage=validation_stage,
        )
        warning = check_stage_consistency(assumption)
        if warning:
            logger.warning(
                warning["message"],
                extra={"project_id": project_id, "assumption_id": assumption.id,
                       "error_code": warning["error_code"]},
            )
        assumption = await self.assumptions.add(project_id, assumption)
        await self._db.commit()
        return assumption, warning

    async def get_assumption(self, project_id: str, assumption_id: str) -> Assumption:
        assumption = await self.assumptions.get(project_id, assumption_id)
        if assumption is None:
            raise ResourceNotFoundError(
                "Assumption", assumption_id,
                ErrorContext(project_id=project_id, assumption_id=assumption_id),
            )
        return assumption

    async def list_assumptions(
        self, project_id: str, stage: ValidationStage | None = None,
    ) -> list[Assumption]:
        project = await self.get_project(project_id)
        assumptions = await self.assumptions.list_by_project(project_id)
        if stage is None:
            return assumptions
        return sorted_assumptions_for_stage(assumptions, stage, self.config_for(project))

    async def update_assumption(
        self,
        project_id: str,
        assumption_id: str,
        description: str | None = None,
        confidence: int | None = None,
        importance: int | None = None,
    ) -> Assumption:
        assumption = await self.get_assumption(project_id, assumption_id)
        now = datetime.now(timezone.utc)
        if description is not None:
            assumption = replace(assumption, description=description, last_updated=now)
        if confidence is not None or importance is not None:
            assumption = lifecycle.update_ratings(assumption, confidence, importance, now)
        assumption = await self.assumptions.save(project_id, assumption)
        await self._db.commit()
        return assumption

    async def change_status(
        self, project_id: str, assumption_id: str, status: AssumptionStatus,
    ) -> Assumption:
        assumption = await self.get_assumption(project_id, assumption_id)
        previous = assumption.status
        assumption = lifecycle.transition_status(assumption, status)
        assumption = await self.assumptions.save(project_id, assumption)
        await self._db.commit()
        logger.info(
            f"Assumption status {AssumptionStatus(previous).value} -> "
            f"{AssumptionStatus(status).value}",
            extra={"project_id": project_id, "assumption_id": assumption_id},
        )
        return assumption

    async def add_evidence(
        self, project_id: str, assumption_id: str, text: str,
    ) -> Assumption:
        assumption = await self.get_assumption(project_id, assumption_id)
        assumption = await self.assumptions.save(
            project_id, lifecycle.add_evidence(assumption, text),
        )
        await self._db.commit()
        return assumption

    async def delete_assumption(self, project_id: str, assumption_id: str) -> None:
        _, assumptions, interviews = await self.snapshot(project_id)
        if not any(a.id == assumption_id for a in assumptions):
            raise ResourceNotFoundError(
                "Assumption", assumption_id,
                ErrorContext(project_id=project_id, assumption_id=assumption_id),
            )
        _, cleaned = lifecycle.remove_assumption(assumptions, interviews, assumption_id)
        for before, after in zip(interviews, cleaned):
            if before is not after:
                await self.interviews.save(project_id, after)
        await self.assumptions.delete(project_id, assumption_id)
        await self._db.commit()
        logger.info(
            "Assumption deleted",
            extra={"project_id": project_id, "assumption_id": assumption_id},
        )

    async def eligibility(
        self, project_id: str, assumption_id: str,
    ) -> tuple[ValidationEligibility, EvidenceSummary]:
        project, assumptions, interviews = await self.snapshot(project_id)
        assumption = _find(assumptions, assumption_id, project_id)
        _raise_if_invalid(validate_snapshot(assumptions, interviews), project_id)
        index = EvidenceIndex(interviews)
        result = check_validation_eligibility(
            assumption, interviews, project.beachhead_segment_name,
            self.config_for(project), index,
        )
        return result, summarize_evidence(index, assumption_id)

    async def accept_suggestion(self, project_id: str, assumption_id: str) -> Assumption:
        eligibility, _ = await self.eligibility(project_id, assumption_id)
        assumption = await self.get_assumption(project_id, assumption_id)
        assumption = lifecycle.accept_suggestion(assumption, eligibility)
        assumption = await self.assumptions.save(project_id, assumption)
        await self._db.commit()
        logger.info(
            f"Suggestion accepted: {assumption.status.value}",
            extra={"project_id": project_id, "assumption_id": assumption_id},
        )
        return assumption

    # ─── Interviews ──────────────────────────────────────────────

    async def create_interview(
        self, project_id: str, fields: dict, tags: list[AssumptionTag],
    ) -> Interview:
        """Record an interview and fold its tags into the tagged assumptions."""
        _, assumptions, _ = await self.snapshot(project_id)
        interview = Interview(
            id=str(uuid.uuid4()), assumption_tags=tuple(tags), **fields,
        )
        _raise_if_invalid(
            check_interview(interview)
            or check_tag_targets(interview, (a.id for a in assumptions)),
            project_id,
        )
        interview = await self.interviews.add(project_id, interview)
        updated = lifecycle.apply_interview_tags(assumptions, interview)
        for before, after in zip(assumptions, updated):
            if before is not after:
                await self.assumptions.save(project_id, after)
        await self._db.commit()
        logger.info(
            f"Interview recorded with {len(tags)} tag(s)",
            extra={"project_id": project_id, "interview_id": interview.id},
        )
        return interview

    async def get_interview(self, project_id: str, interview_id: str) -> Interview:
        interview = await self.interviews.get(project_id, interview_id)
        if interview is None:
            raise ResourceNotFoundError(
                "Interview", interview_id,
                ErrorContext(project_id=project_id, interview_id=interview_id),
            )
        return interview

    async def list_interviews(self, project_id: str) -> list[Interview]:
        await self.get_project(project_id)
        return await self.interviews.list_by_project(project_id)

    async def update_interview(
        self, project_id: str, interview_id: str, fields: dict,
        tags: list[AssumptionTag] | None = None,
    ) -> Interview:
        interview = await self.get_interview(project_id, interview_id)
        changes = dict(fields)
        if tags is not None:
            changes["assumption_tags"] = tuple(tags)
        interview = replace(interview, **changes)
        assumptions = await self.assumptions.list_by_project(project_id)
        _raise_if_invalid(
            check_interview(interview)
            or check_tag_targets(interview, (a.id for a in assumptions)),
            project_id,
        )
        interview = await self.interviews.save(project_id, interview)
        await self._recount(project_id)
        await self._db.commit()
        return interview

    async def delete_interview(self, project_id: str, interview_id: str) -> None:
        await self.get_interview(project_id, interview_id)
        await self.interviews.delete(project_id, interview_id)
        await self._recount(project_id)
        await self._db.commit()
        logger.info(
            "Interview deleted",
            extra={"project_id": project_id, "interview_id": interview_id},
        )

    async def _recount(self, project_id: str) -> None:
        assumptions = await self.assumptions.list_by_project(project_id)
        interviews = await self.interviews.list_by_project(project_id)
        for before, after in zip(assumptions, lifecycle.recount_interviews(assumptions, interviews)):
            if before is not after:
                await self.assumptions.save(project_id, after)

    # ─── Evaluation ──────────────────────────────────────────────

    async def evaluate(self, project_id: str) -> dict[ValidationStage, StageStatus]:
        project, assumptions, interviews = await self.snapshot(project_id)
        _raise_if_invalid(validate_snapshot(assumptions, interviews), project_id)
        return evaluate_all_stages(assumptions, interviews, self.config_for(project))

    async def progress(self, project_id: str) -> dict:
        project, assumptions, interviews = await self.snapshot(project_id)
        _raise_if_invalid(validate_snapshot(assumptions, interviews), project_id)
        config = self.config_for(project)
        statuses = evaluate_all_stages(assumptions, interviews, config)
        return {
            "overall_progress": calculate_overall_progress(statuses, config),
            "highest_unlocked_stage": highest_unlocked_stage(statuses),
            "stages": statuses,
        }

    async def interview_requirements(self, project_id: str) -> InterviewRequirements:
        project, assumptions, interviews = await self.snapshot(project_id)
        _raise_if_invalid(validate_snapshot(assumptions, interviews), project_id)
        return calculate_interview_requirements(
            interviews, assumptions, project.beachhead_segment_name,
            self.config_for(project),
        )

    async def interview_priorities(self, project_id: str, limit: int) -> InterviewPriorities:
        project, assumptions, interviews = await self.snapshot(project_id)
        _raise_if_invalid(validate_snapshot(assumptions, interviews), project_id)
        statuses = evaluate_all_stages(assumptions, interviews, self.config_for(project))
        return prioritized_assumptions_for_interview(assumptions, statuses, limit)


def _find(assumptions: list[Assumption], assumption_id: str, project_id: str) -> Assumption:
    for assumption in assumptions:
        if assumption.id == assumption_id:
            return assumption
    raise ResourceNotFoundError(
        "Assumption", assumption_id,
        ErrorContext(project_id=project_id, assumption_id=assumption_id),
    )


def _raise_if_invalid(error: dict | None, project_id: str) -> None:
    if error:
        raise InputValidationError(error, ErrorContext(project_id=project_id))


def interview_fields(data: dict) -> dict:
    """Map API field names onto Interview dataclass fields."""
    fields = dict(data)
    if "interview_date" in fields:
        interview_date: date = fields.pop("interview_date")
        fields["date"] = interview_date
    if "memorable_quotes" in fields and fields["memorable_quotes"] is not None:
        fields["memorable_quotes"] = tuple(fields["memorable_quotes"])
    return fields
