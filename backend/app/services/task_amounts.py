from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.tasks import Subtask, Task

logger = logging.getLogger(__name__)


def total_subtask_amount(db: Session, task_id: int) -> float:
    total = db.execute(
        select(func.coalesce(func.sum(Subtask.amount_needed), 0)).where(
            Subtask.task_id == task_id
        )
    ).scalar_one()
    return float(total or 0)


def update_task_amount(db: Session, task_id: int) -> bool:
    """Store the sum of the task's subtask amounts on the task itself."""
    try:
        task = db.get(Task, task_id)
        if not task:
            logger.warning("Cannot update amount for missing task %s", task_id)
            return False
        task.amount_needed = total_subtask_amount(db, task_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating amount for task %s", task_id)
        return False
    return True
