from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.security import utc_now
from app.models.activity import ActivityEvent
from app.models.enums import ActivityCategory, ActivitySeverity, UserRole
from app.models.tasks import Subtask
from app.models.users import User

logger = logging.getLogger(__name__)

SUBTASK_ACTION_MESSAGES = {
    "created": "יצר תת-משימה חדשה",
    "updated": "עדכן תת-משימה",
    "deleted": "מחק תת-משימה",
    "viewed": "צפה בתת-משימה",
}


def _severity_for(action: str) -> ActivitySeverity:
    if action == "deleted":
        return ActivitySeverity.WARNING
    if action == "created":
        return ActivitySeverity.SUCCESS
    return ActivitySeverity.INFO


def _user_type(user: User | None) -> str:
    if user is None:
        return "system"
    if user.role in (UserRole.ADMIN.value, UserRole.DATA_MANAGER.value):
        return "admin"
    return "user"


def log_activity(
    db: Session,
    *,
    action: str,
    category: ActivityCategory,
    severity: ActivitySeverity,
    user: User | None = None,
    target_id: str | None = None,
    target_type: str | None = None,
    target_title: str | None = None,
    details: dict[str, Any] | None = None,
    is_visible: bool = True,
) -> ActivityEvent:
    event = ActivityEvent(
        timestamp=utc_now(),
        user_id=user.id if user else None,
        user_type=_user_type(user),
        action=action,
        category=category.value,
        target_id=target_id,
        target_type=target_type,
        target_title=target_title,
        details=details,
        severity=severity.value,
        is_visible=is_visible,
    )
    db.add(event)
    db.flush()
    logger.info(
        "Activity: %s (category=%s target=%s user=%s)",
        action,
        category.value,
        target_id,
        event.user_id,
    )
    return event


def log_subtask_activity(
    db: Session,
    action: str,
    subtask: Subtask,
    user: User | None = None,
    details: dict[str, Any] | None = None,
) -> ActivityEvent:
    if action not in SUBTASK_ACTION_MESSAGES:
        raise ValueError(f"Unknown subtask activity: {action}")
    return log_activity(
        db,
        action=SUBTASK_ACTION_MESSAGES[action],
        category=ActivityCategory.SUBTASK,
        severity=_severity_for(action),
        user=user,
        target_id=str(subtask.id),
        target_type="subtask",
        target_title=subtask.title,
        details={**(details or {}), "parentTaskId": subtask.task_id},
        is_visible=action != "viewed",
    )
