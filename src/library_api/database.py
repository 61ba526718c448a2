import logging
import time
from collections.abc import Callable
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from library_api.config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }


engine = create_engine(settings.database_url, echo=False, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


class DatabaseNotReadyError(RuntimeError):
    """Raised when the database does not answer a ping within the allowed attempts."""

    pass


def ping(db_engine: Engine, timeout: float) -> None:
    with db_engine.connect() as connection:
        if db_engine.dialect.name == "postgresql":
            connection.execute(
                text("SELECT set_config('statement_timeout', :value, false)"),
                {"value": f"{int(timeout * 1000)}ms"},
            )
        connection.execute(text("SELECT 1"))


def wait_for_database(
    db_engine: Engine,
    attempts: int = 10,
    ping_timeout: float = 3.0,
    max_backoff: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Blocks until the database answers ``SELECT 1``.

    The delay between attempts starts at one second and doubles until it
    reaches ``max_backoff``. Raises DatabaseNotReadyError after ``attempts``
    failed pings, chained to the last failure.
    """
    backoff = 1.0
    last_error: SQLAlchemyError | None = None

    for attempt in range(1, attempts + 1):
        try:
            ping(db_engine, ping_timeout)
        except SQLAlchemyError as exc:
            last_error = exc
            logger.warning(
                "Database not ready attempt=%s/%s retry_in=%ss error=%s",
                attempt,
                attempts,
                backoff,
                exc.__class__.__name__,
            )
        else:
            logger.info("Database ready after %s attempt(s)", attempt)
            return

        if attempt < attempts:
            sleep(backoff)
            backoff = min(backoff * 2, max_backoff)

    raise DatabaseNotReadyError(
        f"database not ready after {attempts} attempts"
    ) from last_error
