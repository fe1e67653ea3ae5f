"""Bulk import of JIRA-exported subtasks into existing tasks.

The HTTP handlers (and the CLI script) run three stages in order:

1. ``validate_import_payload`` rejects malformed payloads before any query.
2. ``resolve_parent_tasks`` maps every parent ``key`` to an existing task;
   one unknown key fails the whole batch.
3. ``run_bulk_import`` normalizes and stores each subtask row. Failures are
   isolated per row and collected into the report.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import Scene, SubtaskType, Weather
from app.models.tasks import Subtask, Task
from app.models.users import User
from app.schemas.bulk_import import ImportReport, ImportRowError, ImportTaskResult, TaskRef
from app.services.activity_log import log_subtask_activity
from app.services.import_mappings import (
    augment_labels,
    map_day_time,
    map_scene,
    map_subtask_type,
    map_weather,
    normalize_target_car,
    strip_dataco_prefix,
)
from app.services.import_validation import (
    amount_is_acceptable,
    is_calibration_parent,
    parse_amount,
)
from app.services.task_amounts import update_task_amount

logger = logging.getLogger(__name__)

DUPLICATE_SUBTASK_ERROR = "Subtask with this DATACO number already exists"


class SubtaskRowError(ValueError):
    """A single import row cannot be stored."""


@dataclass
class ResolutionResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    task_map: dict[str, TaskRef] = field(default_factory=dict)


@dataclass
class SubtaskDraft:
    task_id: int
    title: str
    subtitle: str
    dataco_number: str
    type: SubtaskType
    amount_needed: float
    labels: list[str]
    target_car: list[str]
    weather: Weather
    scene: Scene
    day_time: list[str]


def resolve_parent_tasks(db: Session, parent_issues: list[dict[str, Any]]) -> ResolutionResult:
    keys = [str(parent["key"]) for parent in parent_issues]
    numbers = {strip_dataco_prefix(key) for key in keys}
    tasks_by_number: dict[str, Task] = {}
    if numbers:
        rows = db.execute(select(Task).where(Task.dataco_number.in_(numbers))).scalars()
        tasks_by_number = {task.dataco_number: task for task in rows}

    result = ResolutionResult(valid=False)
    for key in keys:
        task = tasks_by_number.get(strip_dataco_prefix(key))
        if task is None:
            result.errors.append(f"Task with DATACO number {key} not found in the system")
            continue
        result.task_map[key] = TaskRef(id=task.id, title=task.title)
    result.valid = not result.errors
    return result


def normalize_subtask(
    raw: dict[str, Any],
    parent: dict[str, Any],
    task_ref: TaskRef,
    calibration: bool,
) -> SubtaskDraft:
    issue_type = raw.get("issue_type")
    amount = parse_amount(raw.get("amount_needed"))
    if amount is None or not amount_is_acceptable(amount, issue_type, calibration):
        raise SubtaskRowError(
            f"Subtask {raw.get('dataco_number')} has invalid amount_needed: "
            f"{raw.get('amount_needed')}. Must be a positive number"
        )
    summary = str(raw.get("summary") or "")
    return SubtaskDraft(
        task_id=task_ref.id,
        title=summary,
        subtitle="",
        dataco_number=strip_dataco_prefix(raw["dataco_number"]),
        type=map_subtask_type(issue_type, calibration),
        amount_needed=amount,
        labels=augment_labels(raw.get("labels"), summary, calibration),
        target_car=normalize_target_car(parent.get("target_car")),
        weather=map_weather(raw.get("weather")),
        scene=map_scene(raw.get("road_type")),
        day_time=map_day_time(raw.get("day_time")),
    )


def subtask_exists(db: Session, dataco_number: str) -> bool:
    existing = db.execute(
        select(Subtask.id).where(Subtask.dataco_number == dataco_number).limit(1)
    ).first()
    return existing is not None


def _import_row(
    db: Session,
    raw: dict[str, Any],
    parent: dict[str, Any],
    task_ref: TaskRef,
    calibration: bool,
    user: User | None,
) -> Subtask:
    dataco_number = strip_dataco_prefix(raw["dataco_number"])
    if subtask_exists(db, dataco_number):
        raise SubtaskRowError(DUPLICATE_SUBTASK_ERROR)
    draft = normalize_subtask(raw, parent, task_ref, calibration)
    subtask = Subtask(**asdict(draft))
    db.add(subtask)
    db.flush()
    log_subtask_activity(db, "created", subtask, user)
    db.commit()
    return subtask


def run_bulk_import(
    db: Session,
    parent_issues: list[dict[str, Any]],
    task_map: dict[str, TaskRef],
    user: User | None = None,
) -> ImportReport:
    report = ImportReport()
    for parent in parent_issues:
        parent_key = str(parent["key"])
        task_ref = task_map.get(parent_key)
        if task_ref is None:
            continue

        subtasks = parent.get("subtasks") or []
        calibration = is_calibration_parent(subtasks)
        added = 0
        for raw in subtasks:
            report.total_processed += 1
            subtask_key = str(raw.get("dataco_number", ""))
            try:
                _import_row(db, raw, parent, task_ref, calibration, user)
            except Exception as exc:
                db.rollback()
                message = str(exc) or exc.__class__.__name__
                logger.warning(
                    "Bulk import row %s/%s failed: %s", parent_key, subtask_key, message
                )
                report.failed += 1
                report.errors.append(
                    ImportRowError(task_key=parent_key, subtask_key=subtask_key, error=message)
                )
                continue
            report.successful += 1
            added += 1

        update_task_amount(db, task_ref.id)
        report.task_results.append(ImportTaskResult(task_key=parent_key, subtasks_added=added))

    logger.info(
        "Bulk import completed: processed=%s successful=%s failed=%s user=%s",
        report.total_processed,
        report.successful,
        report.failed,
        user.id if user else None,
    )
    return report
