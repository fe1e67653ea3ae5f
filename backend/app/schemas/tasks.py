from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.enums import Scene, SubtaskType, Weather


class ProjectBase(BaseModel):
    name: str
    description: str | None = None


class ProjectCreate(ProjectBase):
    pass


class ProjectRead(ProjectBase):
    id: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class TaskBase(BaseModel):
    title: str
    subtitle: str | None = None
    dataco_number: str
    project_id: int | None = None
    description: dict | None = None
    type: list[str] = []
    locations: list[str] = []
    target_car: list[str] = []
    lidar: bool = False
    day_time: list[str] = []
    priority: int = 0
    is_visible: bool = True


class TaskCreate(TaskBase):
    pass


class TaskRead(TaskBase):
    id: int
    amount_needed: float = 0

    model_config = ConfigDict(from_attributes=True)


class SubtaskRead(BaseModel):
    id: int
    task_id: int
    title: str
    subtitle: str | None = None
    image: str | None = None
    dataco_number: str
    type: SubtaskType
    amount_needed: float = 0
    labels: list[str] = []
    target_car: list[str] = []
    weather: Weather | None = None
    scene: Scene | None = None
    day_time: list[str] = []
    is_visible: bool = True

    model_config = ConfigDict(from_attributes=True)


class TaskAmountRead(BaseModel):
    task_id: int
    amount_needed: float
