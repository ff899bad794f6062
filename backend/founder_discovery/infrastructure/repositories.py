"""SQLAlchemy Repositories: implement the core repository protocols.

Invariants:
    - Repositories return core dataclasses, never ORM rows
    - Every query is scoped by project_id
    - Repositories flush but never commit; the service owns the transaction
    - Ids cross the boundary as strings and are parsed to UUID here
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from founder_discovery.core.domain_types import (
    AssumptionStatus,
    AssumptionType,
    CanvasArea,
    IntervieweeType,
    InterviewStatus,
    PriorityLevel,
    ValidationEffect,
    ValidationStage,
)
from founder_discovery.core.entities import (
    Assumption, AssumptionTag, Interview, Project,
)
from founder_discovery.models.assumption import Assumption as AssumptionModel
from founder_discovery.models.interview import Interview as InterviewModel
from founder_discovery.models.project import Project as ProjectModel


def _uuid(value: str) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


# ─── Row <-> entity conversion ───────────────────────────────────

def project_from_row(row: ProjectModel) -> Project:
    return Project(
        id=str(row.id),
        name=row.name,
        beachhead_segment_name=row.beachhead_segment_name,
        validation_overrides=dict(row.validation_overrides or {}),
        created=row.created_at,
    )


def assumption_from_row(row: AssumptionModel) -> Assumption:
    return Assumption(
        id=str(row.id),
        type=AssumptionType(row.type),
        description=row.description,
        canvas_area=CanvasArea(row.canvas_area),
        status=AssumptionStatus(row.status),
        confidence=row.confidence,
        importance=row.importance,
        validation_stage=(
            ValidationStage(row.validation_stage)
            if row.validation_stage is not None else None
        ),
        risk_score=row.risk_score,
        priority=PriorityLevel(row.priority) if row.priority else None,
        evidence=tuple(row.evidence or ()),
        interview_count=row.interview_count,
        last_tested_date=row.last_tested_date,
        created=row.created_at,
        last_updated=row.updated_at,
    )


def _copy_assumption(row: AssumptionModel, assumption: Assumption) -> None:
    row.type = AssumptionType(assumption.type).value
    row.description = assumption.description
    row.canvas_area = CanvasArea(assumption.canvas_area).value
    row.validation_stage = (
        int(assumption.validation_stage)
        if assumption.validation_stage is not None else None
    )
    row.status = AssumptionStatus(assumption.status).value
    row.confidence = assumption.confidence
    row.importance = assumption.importance
    row.risk_score = assumption.risk_score
    row.priority = PriorityLevel(assumption.priority).value if assumption.priority else None
    row.evidence = list(assumption.evidence)
    row.interview_count = assumption.interview_count
    row.last_tested_date = assumption.last_tested_date
    row.updated_at = assumption.last_updated or datetime.now(timezone.utc)


def tag_to_dict(tag: AssumptionTag) -> dict:
    return {
        "assumption_id": tag.assumption_id,
        "validation_effect": ValidationEffect(tag.validation_effect).value,
        "confidence_change": tag.confidence_change,
        "quote": tag.quote,
    }


def tag_from_dict(data: dict) -> AssumptionTag:
    return AssumptionTag(
        assumption_id=str(data["assumption_id"]),
        validation_effect=ValidationEffect(data.get("validation_effect", "neutral")),
        confidence_change=int(data.get("confidence_change", 0)),
        quote=data.get("quote"),
    )


def interview_from_row(row: InterviewModel) -> Interview:
    return Interview(
        id=str(row.id),
        segment_name=row.segment_name,
        date=row.interview_date,
        interviewee_type=IntervieweeType(row.interviewee_type),
        context=row.context,
        status=InterviewStatus(row.status),
        main_pain_points=row.main_pain_points,
        current_alternatives=row.current_alternatives,
        problem_importance=row.problem_importance,
        memorable_quotes=tuple(row.memorable_quotes or ()),
        surprising_feedback=row.surprising_feedback,
        student_reflection=row.student_reflection,
        assumption_tags=tuple(tag_from_dict(t) for t in row.assumption_tags or ()),
        matches_beachhead=row.matches_beachhead,
    )


def _copy_interview(row: InterviewModel, interview: Interview) -> None:
    row.interviewee_type = IntervieweeType(interview.interviewee_type).value
    row.segment_name = interview.segment_name
    row.interview_date = interview.date
    row.context = interview.context
    row.status = InterviewStatus(interview.status).value
    row.main_pain_points = interview.main_pain_points
    row.current_alternatives = interview.current_alternatives
    row.problem_importance = interview.problem_importance
    row.memorable_quotes = list(interview.memorable_quotes)
    row.surprising_feedback = interview.surprising_feedback
    row.student_reflection = interview.student_reflection
    row.assumption_tags = [tag_to_dict(t) for t in interview.assumption_tags]
    row.matches_beachhead = interview.matches_beachhead


# ─── Repositories ────────────────────────────────────────────────

class SqlProjectRepository:
    """ProjectRepository backed by the projects table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def add(self, project: Project) -> Project:
        row = ProjectModel(
            id=_uuid(project.id),
            name=project.name,
            beachhead_segment_name=project.beachhead_segment_name,
            validation_overrides=dict(project.validation_overrides),
        )
        self._db.add(row)
        await self._db.flush()
        return project_from_row(row)

    async def get(self, project_id: str) -> Project | None:
        row = await self._db.get(ProjectModel, _uuid(project_id))
        return project_from_row(row) if row else None

    async def save(self, project: Project) -> Project:
        row = await self._db.get(ProjectModel, _uuid(project.id))
        row.name = project.name
        row.beachhead_segment_name = project.beachhead_segment_name
        row.validation_overrides = dict(project.validation_overrides)
        await self._db.flush()
        return project_from_row(row)

    async def delete(self, project_id: str) -> None:
        row = await self._db.get(ProjectModel, _uuid(project_id))
        if row is not None:
            await self._db.delete(row)
            await self._db.flush()


class SqlAssumptionRepository:
    """AssumptionRepository backed by the assumptions table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_by_project(self, project_id: str) -> list[Assumption]:
        result = await self._db.execute(
            select(AssumptionModel)
            .where(AssumptionModel.project_id == _uuid(project_id))
            .order_by(AssumptionModel.created_at),
        )
        return [assumption_from_row(r) for r in result.scalars().all()]

    async def _row(self, project_id: str, assumption_id: str) -> AssumptionModel | None:
        result = await self._db.execute(
            select(AssumptionModel).where(
                AssumptionModel.project_id == _uuid(project_id),
                AssumptionModel.id == _uuid(assumption_id),
            ),
        )
        return result.scalar_one_or_none()

    async def get(self, project_id: str, assumption_id: str) -> Assumption | None:
        row = await self._row(project_id, assumption_id)
        return assumption_from_row(row) if row else None

    async def add(self, project_id: str, assumption: Assumption) -> Assumption:
        row = AssumptionModel(id=_uuid(assumption.id), project_id=_uuid(project_id))
        _copy_assumption(row, assumption)
        if assumption.created is not None:
            row.created_at = assumption.created
        self._db.add(row)
        await self._db.flush()
        return assumption_from_row(row)

    async def save(self, project_id: str, assumption: Assumption) -> Assumption:
        row = await self._row(project_id, assumption.id)
        _copy_assumption(row, assumption)
        await self._db.flush()
        return assumption_from_row(row)

    async def delete(self, project_id: str, assumption_id: str) -> None:
        await self._db.execute(
            delete(AssumptionModel).where(
                AssumptionModel.project_id == _uuid(project_id),
                AssumptionModel.id == _uuid(assumption_id),
            ),
        )


class SqlInterviewRepository:
    """InterviewRepository backed by the interviews table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_by_project(self, project_id: str) -> list[Interview]:
        result = await self._db.execute(
            select(InterviewModel)
            .where(InterviewModel.project_id == _uuid(project_id))
            .order_by(InterviewModel.interview_date, InterviewModel.created_at),
        )
        return [interview_from_row(r) for r in result.scalars().all()]

    async def _row(self, project_id: str, interview_id: str) -> InterviewModel | None:
        result = await self._db.execute(
            select(InterviewModel).where(
                InterviewModel.project_id == _uuid(project_id),
                InterviewModel.id == _uuid(interview_id),
            ),
        )
        return result.scalar_one_or_none()

    async def get(self, project_id: str, interview_id: str) -> Interview | None:
        row = await self._row(project_id, interview_id)
        return interview_from_row(row) if row else None

    async def add(self, project_id: str, interview: Interview) -> Interview:
        row = InterviewModel(id=_uuid(interview.id), project_id=_uuid(project_id))
        _copy_interview(row, interview)
        self._db.add(row)
        await self._db.flush()
        return interview_from_row(row)

    async def save(self, project_id: str, interview: Interview) -> Interview:
        row = await self._row(project_id, interview.id)
        _copy_interview(row, interview)
        await self._db.flush()
        return interview_from_row(row)

    async def delete(self, project_id: str, interview_id: str) -> None:
        await self._db.execute(
            delete(InterviewModel).where(
                InterviewModel.project_id == _uuid(project_id),
                InterviewModel.id == _uuid(interview_id),
            ),
        )
