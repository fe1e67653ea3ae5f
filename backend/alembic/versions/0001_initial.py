"""Initial schema: users, projects, tasks, subtasks, activity events.

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

from app.db.base import JSONType

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

SUBTASK_TYPES = ("events", "hours", "loops")
WEATHER_VALUES = ("Clear", "Fog", "Overcast", "Rain", "Snow", "Mixed")
SCENE_VALUES = ("Highway", "Urban", "Rural", "Sub-Urban", "Test Track", "Mixed")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "user_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("token_hash", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_user_sessions_user_id", "user_sessions", ["user_id"])
    op.create_index("ix_user_sessions_token_hash", "user_sessions", ["token_hash"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("subtitle", sa.String(300), nullable=True),
        sa.Column("dataco_number", sa.String(50), nullable=False),
        sa.Column("description", JSONType, nullable=True),
        sa.Column("type", JSONType, nullable=False),
        sa.Column("locations", JSONType, nullable=False),
        sa.Column("amount_needed", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("target_car", JSONType, nullable=False),
        sa.Column("lidar", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("day_time", JSONType, nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"])
    op.create_index("ix_tasks_dataco_number", "tasks", ["dataco_number"], unique=True)

    op.create_table(
        "subtasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("task_id", sa.Integer(), sa.ForeignKey("tasks.id"), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("subtitle", sa.String(300), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("dataco_number", sa.String(50), nullable=False),
        sa.Column("type", sa.Enum(*SUBTASK_TYPES, name="subtasktype"), nullable=False),
        sa.Column("amount_needed", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("labels", JSONType, nullable=False),
        sa.Column("target_car", JSONType, nullable=False),
        sa.Column("weather", sa.Enum(*WEATHER_VALUES, name="weather"), nullable=True),
        sa.Column("scene", sa.Enum(*SCENE_VALUES, name="scene"), nullable=True),
        sa.Column("day_time", JSONType, nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_subtasks_task_id", "subtasks", ["task_id"])
    op.create_index("ix_subtasks_dataco_number", "subtasks", ["dataco_number"])

    op.create_table(
        "activity_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("user_type", sa.String(20), nullable=False),
        sa.Column("action", sa.String(200), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("target_id", sa.String(100), nullable=True),
        sa.Column("target_type", sa.String(50), nullable=True),
        sa.Column("target_title", sa.String(300), nullable=True),
        sa.Column("details", JSONType, nullable=True),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_activity_events_timestamp", "activity_events", ["timestamp"])
    op.create_index("ix_activity_events_user_id", "activity_events", ["user_id"])
    op.create_index("ix_activity_events_category", "activity_events", ["category"])


def downgrade() -> None:
    op.drop_table("activity_events")
    op.drop_table("subtasks")
    op.drop_table("tasks")
    op.drop_table("projects")
    op.drop_table("user_sessions")
    op.drop_table("users")
    for enum_name in ("subtasktype", "weather", "scene"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
