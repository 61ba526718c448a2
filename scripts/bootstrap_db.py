import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import Engine

from library_api.config import settings
from library_api.database import engine, wait_for_database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def bootstrap(
    db_engine: Engine = engine,
    alembic_ini: Path = DEFAULT_ALEMBIC_INI,
    revision: str = "head",
) -> None:
    wait_for_database(
        db_engine,
        attempts=settings.db_connect_attempts,
        ping_timeout=settings.db_ping_timeout_seconds,
        max_backoff=settings.db_max_backoff_seconds,
    )

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.attributes["configure_logger"] = False
    command.upgrade(alembic_cfg, revision)
    logger.info("Database connected and migrations completed revision=%s", revision)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Wait for the database to accept connections, then apply migrations."
    )
    parser.add_argument("--revision", default="head", help="Alembic revision to upgrade to")
    parser.add_argument(
        "--alembic-ini", type=Path, default=DEFAULT_ALEMBIC_INI, help="Path to alembic.ini"
    )
    args = parser.parse_args()
    bootstrap(alembic_ini=args.alembic_ini, revision=args.revision)
