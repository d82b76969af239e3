"""Initial tables: profiles, attempts, session_entries.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_key", sa.String(64), nullable=False),
        sa.Column("total_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("scenarios_attempted", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("scenarios_correct", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_profiles_session_key"), "profiles", ["session_key"], unique=True)

    op.create_table(
        "attempts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("scenario_id", sa.String(64), nullable=False),
        sa.Column("selected_action", sa.String(64), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("score_change", sa.Integer(), nullable=False),
        sa.Column("time_taken_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_attempts_profile_id"), "attempts", ["profile_id"], unique=False)
    op.create_index(op.f("ix_attempts_scenario_id"), "attempts", ["scenario_id"], unique=False)

    op.create_table(
        "session_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_key", sa.String(64), nullable=False),
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_key", "key", name="uq_session_entries_session_key_key"),
    )
    op.create_index(op.f("ix_session_entries_session_key"), "session_entries", ["session_key"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_session_entries_session_key"), table_name="session_entries")
    op.drop_table("session_entries")
    op.drop_index(op.f("ix_attempts_scenario_id"), table_name="attempts")
    op.drop_index(op.f("ix_attempts_profile_id"), table_name="attempts")
    op.drop_table("attempts")
    op.drop_index(op.f("ix_profiles_session_key"), table_name="profiles")
    op.drop_table("profiles")
