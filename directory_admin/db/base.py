import logging
import os
import signal
from collections.abc import Callable, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import ExceptionContext
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from directory_admin.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Normalize PostgreSQL URL to use psycopg3 driver. SQLite URLs (tests) pass through."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def terminate_process(exc: BaseException) -> None:
    """Ask the server to shut down; a supervisor restarts it with a fresh pool."""
    os.kill(os.getpid(), signal.SIGTERM)


class Database:
    """
    Process-wide engine and session factory, built once in create_app.

    A connection lost in the middle of a statement is treated as fatal: it is
    logged and on_fatal_error is called, which by default stops the process.
    Stale connections found by the checkout ping are replaced silently.
    """

    def __init__(
        self,
        settings: Settings,
        on_fatal_error: Callable[[BaseException], None] = terminate_process,
    ) -> None:
        url = normalize_database_url(settings.database_url)
        if url.startswith("sqlite"):
            self.engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            # pool_recycle caps connection age; SQLAlchemy has no idle-reclaim timer
            self.engine = create_engine(
                url,
                pool_size=settings.db_pool_size,
                pool_timeout=settings.db_pool_timeout_seconds,
                pool_recycle=settings.db_pool_recycle_seconds,
                pool_pre_ping=True,
            )
        self.on_fatal_error = on_fatal_error
        event.listen(self.engine, "handle_error", self.handle_error)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def handle_error(self, context: ExceptionContext) -> None:
        if not context.is_disconnect or getattr(context, "is_pre_ping", False):
            return
        logger.critical("Database connection lost; shutting down: %s", context.original_exception)
        self.on_fatal_error(context.original_exception)

    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()
