from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType


class ActivityEvent(Base):
    __tablename__ = "activity_events"

    id: Mapped[int] = mapped_column(primary_key=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    user_type: Mapped[str] = mapped_column(String(20))
    action: Mapped[str] = mapped_column(String(200))
    category: Mapped[str] = mapped_column(String(50), index=True)
    target_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    details: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    severity: Mapped[str] = mapped_column(String(20))
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)
