from app.models.activity import ActivityEvent
from app.models.enums import *  # noqa: F403
from app.models.tasks import Project, Subtask, Task
from app.models.users import User, UserSession

__all__ = [
    "ActivityEvent",
    "Project",
    "Subtask",
    "Task",
    "User",
    "UserSession",
]
