"""Initial schema: projects, assumptions, interviews.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("beachhead_segment_name", sa.String(200), nullable=True),
        sa.Column("validation_overrides", sa.JSON, nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "assumptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id", UUID(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("canvas_area", sa.String(40), nullable=False),
        sa.Column("validation_stage", sa.Integer, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="untested"),
        sa.Column("confidence", sa.Integer, nullable=False, server_default="3"),
        sa.Column("importance", sa.Integer, nullable=False, server_default="3"),
        sa.Column("risk_score", sa.Integer, nullable=True),
        sa.Column("priority", sa.String(10), nullable=True),
        sa.Column("evidence", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("interview_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_tested_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_assumptions_project_id", "assumptions", ["project_id"])

    op.create_table(
        "interviews",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id", UUID(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("interviewee_type", sa.String(20), nullable=False, server_default="customer"),
        sa.Column("segment_name", sa.String(200), nullable=False),
        sa.Column("interview_date", sa.Date, nullable=False),
        sa.Column("context", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="completed"),
        sa.Column("main_pain_points", sa.Text, nullable=False, server_default=""),
        sa.Column("current_alternatives", sa.Text, nullable=False, server_default=""),
        sa.Column("problem_importance", sa.Integer, nullable=False, server_default="3"),
        sa.Column("memorable_quotes", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("surprising_feedback", sa.Text, nullable=False, server_default=""),
        sa.Column("student_reflection", sa.Text, nullable=False, server_default=""),
        sa.Column("assumption_tags", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("matches_beachhead", sa.Boolean, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_interviews_project_id", "interviews", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_interviews_project_id", table_name="interviews")
    op.drop_table("interviews")
    op.drop_index("ix_assumptions_project_id", table_name="assumptions")
    op.drop_table("assumptions")
    op.drop_table("projects")
