from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.models.tasks import Project, Subtask, Task
from app.models.users import User
from app.schemas.tasks import SubtaskRead, TaskAmountRead, TaskCreate, TaskRead
from app.services.import_mappings import strip_dataco_prefix
from app.services.task_amounts import update_task_amount

router = APIRouter()


def _get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/", response_model=list[TaskRead])
def list_tasks(
    project_id: int | None = None,
    include_hidden: bool = False,
    db: Session = Depends(get_db),
) -> list[Task]:
    stmt = select(Task).order_by(Task.priority, Task.title)
    if project_id is not None:
        stmt = stmt.where(Task.project_id == project_id)
    if not include_hidden:
        stmt = stmt.where(Task.is_visible.is_(True))
    return list(db.execute(stmt).scalars())


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Task:
    if payload.project_id is not None and not db.get(Project, payload.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    dataco_number = strip_dataco_prefix(payload.dataco_number)
    if not dataco_number:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="dataco_number is required"
        )
    existing = db.execute(
        select(Task.id).where(Task.dataco_number == dataco_number)
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Task with this DATACO number already exists",
        )
    data = payload.model_dump()
    data["dataco_number"] = dataco_number
    task = Task(**data, amount_needed=0)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, db: Session = Depends(get_db)) -> Task:
    return _get_task_or_404(db, task_id)


@router.get("/{task_id}/subtasks", response_model=list[SubtaskRead])
def list_task_subtasks(task_id: int, db: Session = Depends(get_db)) -> list[Subtask]:
    _get_task_or_404(db, task_id)
    return list(
        db.execute(
            select(Subtask).where(Subtask.task_id == task_id).order_by(Subtask.id)
        ).scalars()
    )


@router.post("/{task_id}/calculate-amount", response_model=TaskAmountRead)
def calculate_task_amount(
    task_id: int,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> TaskAmountRead:
    _get_task_or_404(db, task_id)
    if not update_task_amount(db, task_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to recalculate task amount",
        )
    task = _get_task_or_404(db, task_id)
    return TaskAmountRead(task_id=task.id, amount_needed=float(task.amount_needed or 0))
