"""Lookup tables and field normalizers for JIRA-exported subtask rows.

Every function here is pure: the same input always yields the same output and
nothing is read from or written to the database.
"""

from __future__ import annotations

import re
from typing import Any

from app.models.enums import DayTime, JiraIssueType, Scene, SubtaskType, Weather

DATACO_PREFIX_RE = re.compile(r"^DATACO-", re.IGNORECASE)

VALID_WEATHER = frozenset(member.value for member in Weather)

# Ordered: compound road types resolve to the earliest scene in this table.
ROAD_TYPE_TO_SCENE: dict[str, Scene] = {
    "Highway": Scene.HIGHWAY,
    "Urban": Scene.URBAN,
    "Rural": Scene.RURAL,
    "Sub-Urban": Scene.SUB_URBAN,
    "Test Track": Scene.TEST_TRACK,
    "Mixed": Scene.MIXED,
}

DAY_TIME_TOKENS: dict[str, DayTime] = {
    "Day": DayTime.DAY,
    "Night": DayTime.NIGHT,
    "Dusk": DayTime.DUSK,
    "Dawn": DayTime.DAWN,
}

ISSUE_TYPE_TO_SUBTASK_TYPE: dict[str, SubtaskType] = {
    "hours": SubtaskType.HOURS,
    "loops": SubtaskType.LOOPS,
}

CALIBRATION_LABELS = ("calibration", "stability")

# Summary substring -> derived label; the first match wins.
APPROVAL_LABELS: tuple[tuple[str, str], ...] = (
    ("setup approval", "setup-approval"),
    ("calibration approval", "calibration-approval"),
    ("di validations", "di-validation"),
    ("gt approval", "gt-approval"),
    ("c2l approval", "c2l-approval"),
)


def strip_dataco_prefix(value: Any) -> str:
    return DATACO_PREFIX_RE.sub("", str(value).strip())


def normalize_target_car(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def normalize_labels(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def is_unknown_weather(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == "unknown"


def map_weather(value: Any) -> Weather:
    if is_unknown_weather(value):
        return Weather.MIXED
    if isinstance(value, str) and value in VALID_WEATHER:
        return Weather(value)
    return Weather.CLEAR


def map_scene(road_type: Any) -> Scene:
    if not isinstance(road_type, str):
        return Scene.MIXED
    direct = ROAD_TYPE_TO_SCENE.get(road_type.strip())
    if direct is not None:
        return direct
    if "/" in road_type:
        segments = {segment.strip() for segment in road_type.split("/")}
        for name, scene in ROAD_TYPE_TO_SCENE.items():
            if name in segments:
                return scene
    return Scene.MIXED


def map_day_time(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if value == "Mixed":
        return [member.value for member in DayTime]
    token = DAY_TIME_TOKENS.get(value) if isinstance(value, str) else None
    return [token.value] if token else []


def map_subtask_type(issue_type: Any, calibration: bool) -> SubtaskType:
    if calibration or issue_type == JiraIssueType.SUB_TASK.value:
        return SubtaskType.EVENTS
    return ISSUE_TYPE_TO_SUBTASK_TYPE.get(str(issue_type).lower(), SubtaskType.EVENTS)


def derive_approval_label(summary: Any) -> str | None:
    text = str(summary or "").lower()
    for needle, label in APPROVAL_LABELS:
        if needle in text:
            return label
    return None


def augment_labels(labels: Any, summary: Any, calibration: bool) -> list[str]:
    result = normalize_labels(labels)
    if not calibration:
        return result
    for label in CALIBRATION_LABELS:
        if label not in result:
            result.append(label)
    derived = derive_approval_label(summary)
    if derived and derived not in result:
        result.append(derived)
    return result
