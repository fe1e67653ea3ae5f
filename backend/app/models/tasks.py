from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType
from app.models.enums import Scene, SubtaskType, Weather


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int | None] = mapped_column(
        ForeignKey("projects.id"), index=True, nullable=True
    )
    title: Mapped[str] = mapped_column(String(300))
    subtitle: Mapped[str | None] = mapped_column(String(300), nullable=True)
    dataco_number: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    description: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    type: Mapped[list[str]] = mapped_column(JSONType, default=list)
    locations: Mapped[list[str]] = mapped_column(JSONType, default=list)
    amount_needed: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    target_car: Mapped[list[str]] = mapped_column(JSONType, default=list)
    lidar: Mapped[bool] = mapped_column(Boolean, default=False)
    day_time: Mapped[list[str]] = mapped_column(JSONType, default=list)
    priority: Mapped[int] = mapped_column(Integer, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Subtask(Base):
    __tablename__ = "subtasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    task_id: Mapped[int] = mapped_column(ForeignKey("tasks.id"), index=True)
    title: Mapped[str] = mapped_column(String(300))
    subtitle: Mapped[str | None] = mapped_column(String(300), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    dataco_number: Mapped[str] = mapped_column(String(50), index=True)
    type: Mapped[SubtaskType] = mapped_column(
        Enum(SubtaskType, values_callable=_enum_values)
    )
    amount_needed: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    labels: Mapped[list[str]] = mapped_column(JSONType, default=list)
    target_car: Mapped[list[str]] = mapped_column(JSONType, default=list)
    weather: Mapped[Weather | None] = mapped_column(
        Enum(Weather, values_callable=_enum_values), nullable=True
    )
    scene: Mapped[Scene | None] = mapped_column(
        Enum(Scene, values_callable=_enum_values), nullable=True
    )
    day_time: Mapped[list[str]] = mapped_column(JSONType, default=list)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
