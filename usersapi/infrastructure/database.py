"""
Storage connection for users-api.

Builds the pooled SQLAlchemy engine shared by every repository call.
The engine is created once by the server and disposed when it stops;
the pool is what makes it safe for concurrent use across request threads.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from usersapi.core.config import Settings
from usersapi.domain.users.errors import StorageConnectionError
from usersapi.infrastructure.users.models import Base

logger = logging.getLogger(__name__)


def _connect_args(settings: Settings) -> dict[str, int]:
    if settings.db_driver.startswith("postgresql"):
        return {"connect_timeout": settings.db_connect_timeout}
    return {}


def create_schema(engine: Engine) -> None:
    """Create the users table if it does not exist yet."""
    Base.metadata.create_all(engine)


def open_engine(settings: Settings) -> Engine:
    """Create the engine and verify the database is reachable.

    Args:
        settings: Resolved application settings.

    Returns:
        A connected, pooled engine.

    Raises:
        StorageConnectionError: If no connection can be established or the
            schema cannot be created.
    """
    url = settings.database_url()
    engine = create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        connect_args=_connect_args(settings),
    )

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        if settings.auto_migrate:
            create_schema(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StorageConnectionError(
            f"Could not connect to database at {url.render_as_string(hide_password=True)}: {exc}"
        ) from exc

    logger.info(
        "Connected to database %s on %s:%s.",
        settings.db_name,
        settings.db_host,
        settings.db_port,
    )
    return engine
