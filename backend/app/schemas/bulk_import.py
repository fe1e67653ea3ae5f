from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskRef(CamelModel):
    id: int
    title: str


class ImportRowError(CamelModel):
    task_key: str
    subtask_key: str
    error: str


class ImportTaskResult(CamelModel):
    task_key: str
    subtasks_added: int = 0


class ImportReport(CamelModel):
    total_processed: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[ImportRowError] = Field(default_factory=list)
    task_results: list[ImportTaskResult] = Field(default_factory=list)


class BulkImportValidateResponse(CamelModel):
    valid: bool
    errors: list[str]
    warnings: list[str] | None = None
    task_map: dict[str, TaskRef]
    success: bool = True


class BulkImportResponse(CamelModel):
    success: bool
    message: str
    results: ImportReport
    timestamp: datetime
