# app/db/session.py
import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.db.base import Base

logger = logging.getLogger(__name__)


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """
    Persistence context: one engine plus its session factory.
    Built by create_app and handed to requests through app.state.
    """

    def __init__(self, url: str):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        kwargs = {"future": True, "pool_pre_ping": True}
        if self.is_sqlite:
            # SQLite-friendly connect args
            kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
            if _is_memory_url(url):
                # every session must see the same in-memory database
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **kwargs)

        # Enable WAL + sane pragmas for SQLite
        if self.is_sqlite:
            @event.listens_for(self.engine, "connect")
            def _set_sqlite_pragmas(dbapi_connection, connection_record):
                cur = dbapi_connection.cursor()
                cur.execute("PRAGMA journal_mode=WAL;")
                cur.execute("PRAGMA synchronous=NORMAL;")
                cur.execute("PRAGMA foreign_keys=ON;")
                cur.close()

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            future=True,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    def create_all(self) -> bool:
        """Create missing tables. Returns False (and logs) when the store is unreachable."""
        # Import models so Base.metadata knows every table
        from app.models import application, job, profile, user  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError:
            logger.exception("Database connection failed for %s", self.engine.url.render_as_string(hide_password=True))
            return False
        logger.info("Database ready (%s)", self.engine.url.drivername)
        return True

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a request-scoped Session.
    Use this SAME session for all writes within a request to avoid SQLite locks.
    """
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
