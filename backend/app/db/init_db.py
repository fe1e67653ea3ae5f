import logging

from sqlalchemy.engine import Engine

from app import models  # noqa: F401
from app.core.logging_config import configure_logging
from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db(bind: Engine | None = None) -> None:
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    configure_logging()
    init_db()
