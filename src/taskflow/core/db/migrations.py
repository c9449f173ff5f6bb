"""Alembic migration runner."""

from alembic import command
from alembic.config import Config

from src.taskflow.core.logging import get_logger

logger = get_logger(__name__)


def run_migrations_sync(revision: str = "head") -> None:
    """Upgrade the database to ``revision``. Blocking; call via asyncio.to_thread."""
    cfg = Config("alembic.ini")
    logger.info("Running database migrations", revision=revision)
    command.upgrade(cfg, revision)
