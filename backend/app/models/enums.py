from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    DATA_MANAGER = "data_manager"
    USER = "user"


class SubtaskType(str, Enum):
    EVENTS = "events"
    HOURS = "hours"
    LOOPS = "loops"


class Weather(str, Enum):
    CLEAR = "Clear"
    FOG = "Fog"
    OVERCAST = "Overcast"
    RAIN = "Rain"
    SNOW = "Snow"
    MIXED = "Mixed"


class Scene(str, Enum):
    HIGHWAY = "Highway"
    URBAN = "Urban"
    RURAL = "Rural"
    SUB_URBAN = "Sub-Urban"
    TEST_TRACK = "Test Track"
    MIXED = "Mixed"


class DayTime(str, Enum):
    DAY = "day"
    NIGHT = "night"
    DUSK = "dusk"
    DAWN = "dawn"


class JiraIssueType(str, Enum):
    EVENTS = "Events"
    HOURS = "Hours"
    SUB_TASK = "Sub Task"
    LOOPS = "Loops"


class ActivityCategory(str, Enum):
    TASK = "task"
    PROJECT = "project"
    SUBTASK = "subtask"
    USER = "user"
    SYSTEM = "system"
    AUTH = "auth"


class ActivitySeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
