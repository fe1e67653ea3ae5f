"""Shape checks for bulk-import payloads.

Runs before any database access. Every violation is collected so an operator
sees the complete list in one round trip.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from app.models.enums import JiraIssueType
from app.services.import_mappings import is_unknown_weather, strip_dataco_prefix

VALID_ISSUE_TYPES = tuple(member.value for member in JiraIssueType)
ISSUE_TYPES_TEXT = '"Events", "Hours", "Loops", or "Sub Task"'
# Matches the scale of the amount_needed columns.
AMOUNT_DECIMAL_PLACES = 2


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def parse_amount(value: Any) -> float | None:
    """Return the numeric value of ``amount_needed`` or None when it is not a number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_calibration_parent(subtasks: list[Any]) -> bool:
    """A parent made only of zero-amount placeholder rows or "Sub Task" rows."""
    for subtask in subtasks:
        if not isinstance(subtask, dict):
            return False
        issue_type = subtask.get("issue_type")
        if issue_type == JiraIssueType.SUB_TASK.value:
            continue
        if parse_amount(subtask.get("amount_needed")) == 0 and issue_type != JiraIssueType.LOOPS.value:
            continue
        return False
    return True


def amount_is_acceptable(amount: float, issue_type: Any, calibration: bool) -> bool:
    if amount > 0:
        return True
    return amount == 0 and (calibration or issue_type == JiraIssueType.LOOPS.value)


def _missing(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _validate_subtask(
    subtask: Any,
    subtask_index: int,
    parent_label: str,
    calibration: bool,
    enforce_positive_amounts: bool,
    result: ValidationResult,
) -> None:
    if not isinstance(subtask, dict):
        result.errors.append(
            f"Subtask at index {subtask_index} of parent {parent_label} is not an object"
        )
        return

    dataco_number = subtask.get("dataco_number")
    label = dataco_number if not _missing(dataco_number) else f"at index {subtask_index}"
    if _missing(dataco_number):
        result.errors.append(
            f"Subtask at index {subtask_index} of parent {parent_label} is missing dataco_number"
        )
    elif not strip_dataco_prefix(dataco_number):
        result.errors.append(
            f"Subtask at index {subtask_index} of parent {parent_label} has an empty dataco_number"
        )
    if _missing(subtask.get("summary")):
        result.errors.append(f"Subtask {label} is missing summary")

    issue_type = subtask.get("issue_type")
    if _missing(issue_type):
        result.errors.append(f"Subtask {label} is missing issue_type")
    elif issue_type not in VALID_ISSUE_TYPES:
        result.errors.append(
            f"Subtask {label} has invalid issue_type: {issue_type}. Must be {ISSUE_TYPES_TEXT}"
        )

    raw_amount = subtask.get("amount_needed")
    amount = parse_amount(raw_amount)
    if raw_amount is None or raw_amount == "":
        result.errors.append(f"Subtask {label} is missing amount_needed")
    elif amount is None:
        result.errors.append(
            f"Subtask {label} has invalid amount_needed: {raw_amount}. Must be a number"
        )
    elif amount < 0:
        result.errors.append(
            f"Subtask {label} has invalid amount_needed: {raw_amount}. Must be 0 or positive number"
        )
    elif round(amount, AMOUNT_DECIMAL_PLACES) != amount:
        result.errors.append(
            f"Subtask {label} has invalid amount_needed: {raw_amount}. "
            f"Must have at most {AMOUNT_DECIMAL_PLACES} decimal places"
        )
    elif enforce_positive_amounts and not amount_is_acceptable(amount, issue_type, calibration):
        result.errors.append(
            f"Subtask {label} has invalid amount_needed: {raw_amount}. Must be a positive number"
        )

    if is_unknown_weather(subtask.get("weather")):
        result.warnings.append(
            f'Subtask {label} has weather "Unknown" - will be mapped to "Mixed"'
        )
    road_type = subtask.get("road_type")
    if isinstance(road_type, str) and "/" in road_type:
        result.warnings.append(
            f'Subtask {label} has combined road type "{road_type}" - will use first valid type'
        )
    if amount == 0 and issue_type == JiraIssueType.LOOPS.value:
        result.warnings.append(
            f"Subtask {label} has amount_needed: 0 - this might be a placeholder or conditional task"
        )


def validate_import_payload(
    data: Any, *, enforce_positive_amounts: bool = True
) -> ValidationResult:
    """Check the ``{"parent_issues": [...]}`` structure.

    With ``enforce_positive_amounts=False`` a zero amount on a non-calibration,
    non-Loops row is left for the row stage to reject, so the rest of the batch
    can still be imported.
    """
    result = ValidationResult(valid=False)
    if not isinstance(data, dict):
        result.errors.append("Invalid JSON data structure")
        return result
    parent_issues = data.get("parent_issues")
    if not isinstance(parent_issues, list):
        result.errors.append("Missing or invalid parent_issues array")
        return result

    for parent_index, parent in enumerate(parent_issues):
        if not isinstance(parent, dict):
            result.errors.append(f"Parent issue at index {parent_index} is not an object")
            continue
        key = parent.get("key")
        if _missing(key) or not isinstance(key, (str, int)):
            result.errors.append(
                f"Parent issue at index {parent_index} is missing a key (DATACO number)"
            )
            parent_label = f"at index {parent_index}"
        else:
            parent_label = str(key)

        subtasks = parent.get("subtasks")
        if not isinstance(subtasks, list):
            result.errors.append(f"Parent issue {parent_label} is missing subtasks array")
            continue

        calibration = is_calibration_parent(subtasks)
        for subtask_index, subtask in enumerate(subtasks):
            _validate_subtask(
                subtask,
                subtask_index,
                parent_label,
                calibration,
                enforce_positive_amounts,
                result,
            )

    result.valid = not result.errors
    return result
