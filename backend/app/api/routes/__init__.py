from app.api.routes import auth, bulk_import, projects, tasks

__all__ = [
    "auth",
    "bulk_import",
    "projects",
    "tasks",
]
