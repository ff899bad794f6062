"""Interview ORM: structured customer interview records.

Invariants:
    - Always belongs to a Project (project_id FK, cascade on delete)
    - assumption_tags is a JSON list of
      {assumption_id, validation_effect, confidence_change, quote}
    - matches_beachhead nullable: absent means "compare segment names"

Design Decisions:
    - Tags embedded as JSON rather than a join table: the tag list is the
      many-to-many link and is always read and written with its interview
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, Date, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from founder_discovery.db.base import Base


class Interview(Base):
    """Interview entity: one conversation, tagged against assumptions."""
    __tablename__ = "interviews"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    interviewee_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="customer",
    )
    segment_name: Mapped[str] = mapped_column(String(200), nullable=False)
    interview_date: Mapped[date] = mapped_column(Date, nullable=False)
    context: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="completed",
    )
    main_pain_points: Mapped[str] = mapped_column(Text, nullable=False, default="")
    current_alternatives: Mapped[str] = mapped_column(Text, nullable=False, default="")
    problem_importance: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    memorable_quotes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    surprising_feedback: Mapped[str] = mapped_column(Text, nullable=False, default="")
    student_reflection: Mapped[str] = mapped_column(Text, nullable=False, default="")
    assumption_tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    matches_beachhead: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project", back_populates="interviews",
    )
