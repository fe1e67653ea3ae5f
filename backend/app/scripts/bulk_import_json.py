# Import a JIRA export without going through the admin UI:
# PYTHONPATH=backend ./venv/bin/python -m app.scripts.bulk_import_json export.json --validate-only

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.logging_config import configure_logging
from app.db.session import SessionLocal
from app.models.users import User
from app.services.bulk_import import resolve_parent_tasks, run_bulk_import
from app.services.import_validation import validate_import_payload


def _load_payload(path: Path) -> Any:
    if not path.exists():
        raise RuntimeError(f"Import file not found: {path}")
    with path.open("r", encoding="utf-8-sig") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Import file is not valid JSON: {exc}") from exc


def _find_user(session: Session, username: str | None) -> User | None:
    if not username:
        return None
    user = session.execute(select(User).where(User.username == username)).scalar_one_or_none()
    if user is None:
        raise RuntimeError(f"User not found: {username}")
    return user


def run_json_import(
    session: Session,
    payload: Any,
    *,
    validate_only: bool = False,
    username: str | None = None,
) -> tuple[int, dict[str, Any]]:
    structure = validate_import_payload(payload, enforce_positive_amounts=validate_only)
    if not structure.valid:
        return 1, {"valid": False, "errors": structure.errors}

    resolution = resolve_parent_tasks(session, payload["parent_issues"])
    if validate_only or not resolution.valid:
        output = {
            "valid": resolution.valid,
            "errors": resolution.errors,
            "warnings": structure.warnings,
            "taskMap": {
                key: ref.model_dump() for key, ref in resolution.task_map.items()
            },
        }
        return (0 if resolution.valid else 1), output

    user = _find_user(session, username)
    report = run_bulk_import(session, payload["parent_issues"], resolution.task_map, user)
    return 0, report.model_dump(by_alias=True)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Import JIRA-exported subtasks into existing tasks."
    )
    parser.add_argument("path", type=Path, help="Path to the JIRA export JSON file.")
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Check structure and parent tasks without writing anything.",
    )
    parser.add_argument(
        "--username",
        default=None,
        help="Record activity events under this user (default: system).",
    )
    args = parser.parse_args()

    configure_logging()
    payload = _load_payload(args.path)
    with SessionLocal() as session:
        exit_code, output = run_json_import(
            session,
            payload,
            validate_only=args.validate_only,
            username=args.username,
        )
    print(json.dumps(output, indent=2, ensure_ascii=False))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
