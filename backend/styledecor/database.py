from contextlib import contextmanager
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Storage:
    """Engine and session factory for one process.

    Built once by the app factory and shared by every request; the schema is
    created at startup and the engine disposed at shutdown.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")
        if self.is_sqlite:
            # SQLite uses a per-process connection; pass connect_args and avoid pool sizing
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            if url in ("sqlite://", "sqlite:///:memory:"):
                # In-memory databases live as long as their single connection
                engine_kwargs.setdefault("poolclass", StaticPool)
        else:
            # Avoid stale idle connections causing first-hit failures after inactivity
            engine_kwargs.setdefault("pool_pre_ping", True)
            engine_kwargs.setdefault("pool_recycle", 300)
        self.engine = create_engine(url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _set_sqlite_pragma)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self) -> None:
        # Register every model with the metadata before creating tables
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self):
        """Provide a short-lived session with guaranteed close."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    # SQLite ignores foreign keys unless asked
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


# Dependency
def get_db(request: Request):
    storage: Storage = request.app.state.storage
    with storage.session() as db:
        yield db
