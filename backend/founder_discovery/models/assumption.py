"""Assumption ORM: persisted assumption rows for a project.

Invariants:
    - Always belongs to a Project (project_id FK, cascade on delete)
    - confidence / importance stored as 1-5 integers
    - validation_stage, risk_score, priority nullable: readers compute them when absent
    - evidence is a JSON list of strings, append-only at the service level
    - interview_count is an advisory cache, recounted by the service
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Date, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from founder_discovery.db.base import Base


class Assumption(Base):
    """Assumption entity: a belief linked to one canvas area."""
    __tablename__ = "assumptions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    canvas_area: Mapped[str] = mapped_column(String(40), nullable=False)
    validation_stage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="untested",
    )
    confidence: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    importance: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    risk_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    priority: Mapped[str | None] = mapped_column(String(10), nullable=True)
    evidence: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    interview_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    last_tested_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project", back_populates="assumptions",
    )
