from fastapi import APIRouter

from app.api.routes import auth, bulk_import, projects, tasks

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(
    bulk_import.router, prefix="/tasks/bulk-import", tags=["bulk-import"]
)
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
