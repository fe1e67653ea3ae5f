from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_import_access
from app.core.security import utc_now
from app.models.users import User
from app.schemas.bulk_import import BulkImportResponse, BulkImportValidateResponse
from app.services.bulk_import import resolve_parent_tasks, run_bulk_import
from app.services.import_validation import validate_import_payload

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.post("/validate", response_model=BulkImportValidateResponse)
def validate_bulk_import(
    payload: Any = Body(...),
    user: User = Depends(require_import_access),
    db: Session = Depends(get_db),
) -> JSONResponse:
    user_id = user.id
    try:
        structure = validate_import_payload(payload)
        if not structure.valid:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"valid": False, "errors": structure.errors, "success": False},
            )
        resolution = resolve_parent_tasks(db, payload["parent_issues"])
    except Exception as exc:
        logger.exception("Error validating bulk import data (user=%s)", user_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "valid": False,
                "errors": [f"Failed to validate data: {exc}"],
                "success": False,
            },
        )

    body = BulkImportValidateResponse(
        valid=resolution.valid,
        errors=resolution.errors,
        warnings=structure.warnings or None,
        task_map=resolution.task_map,
    )
    return JSONResponse(
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=NO_CACHE_HEADERS,
    )


@router.post("", response_model=BulkImportResponse)
def bulk_import(
    payload: Any = Body(...),
    user: User = Depends(require_import_access),
    db: Session = Depends(get_db),
) -> JSONResponse:
    user_id = user.id
    try:
        # Zero amounts outside calibration parents fail per row, not per batch.
        structure = validate_import_payload(payload, enforce_positive_amounts=False)
        if not structure.valid:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "success": False,
                    "error": "Invalid JIRA data structure",
                    "validationErrors": structure.errors,
                },
            )

        parent_issues = payload["parent_issues"]
        resolution = resolve_parent_tasks(db, parent_issues)
        if not resolution.valid:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "error": "Some parent tasks not found",
                    "validationErrors": resolution.errors,
                },
            )

        report = run_bulk_import(db, parent_issues, resolution.task_map, user)
    except Exception:
        logger.exception("Error during bulk import (user=%s)", user_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to process bulk import", "success": False},
        )

    body = BulkImportResponse(
        success=True,
        message="Bulk import completed",
        results=report,
        timestamp=utc_now(),
    )
    return JSONResponse(
        content=body.model_dump(mode="json", by_alias=True),
        headers=NO_CACHE_HEADERS,
    )
