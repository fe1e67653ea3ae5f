from __future__ import annotations

import argparse
import getpass

from app.core.logging_config import configure_logging
from app.db.session import SessionLocal
from app.services.user_bootstrap import ensure_bootstrap_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the bootstrap admin user if missing.")
    parser.add_argument("--username", default=None, help="Defaults to BOOTSTRAP_ADMIN_USERNAME.")
    parser.add_argument(
        "--prompt-password",
        action="store_true",
        help="Ask for the password instead of reading BOOTSTRAP_ADMIN_PASSWORD.",
    )
    args = parser.parse_args()

    configure_logging()
    password = getpass.getpass("Admin password: ") if args.prompt_password else None
    with SessionLocal() as session:
        admin = ensure_bootstrap_admin(session, username=args.username, password=password)
        print(f"Admin user ready: {admin.username} (id={admin.id})")


if __name__ == "__main__":
    main()
