"""Project ORM: the aggregate root owning assumptions and interviews.

Invariants:
    - id is UUID primary key
    - beachhead_segment_name is nullable (no beachhead chosen yet)
    - validation_overrides holds per-project ValidationConfig field overrides
    - cascade delete for assumptions and interviews
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from founder_discovery.db.base import Base


class Project(Base):
    """Project aggregate root."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    beachhead_segment_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    validation_overrides: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    assumptions: Mapped[list["Assumption"]] = relationship(
        "Assumption", back_populates="project",
        cascade="all, delete-orphan", lazy="selectin",
    )
    interviews: Mapped[list["Interview"]] = relationship(
        "Interview", back_populates="project",
        cascade="all, delete-orphan", lazy="selectin",
    )
