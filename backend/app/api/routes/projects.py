from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.models.tasks import Project
from app.models.users import User
from app.schemas.tasks import ProjectCreate, ProjectRead

router = APIRouter()


@router.get("/", response_model=list[ProjectRead])
def list_projects(db: Session = Depends(get_db)) -> list[Project]:
    return list(db.execute(select(Project).order_by(Project.name)).scalars())


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Project:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")
    existing = db.execute(select(Project).where(Project.name == name)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Project already exists")
    project = Project(name=name, description=payload.description)
    db.add(project)
    db.commit()
    db.refresh(project)
    return project
