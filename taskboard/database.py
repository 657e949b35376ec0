import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task, User  # noqa: F401

logger = logging.getLogger(__name__)


def _create_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)

    return create_engine(url, echo=False, pool_pre_ping=True)


class Database:
    """Connection pool shared by every request.

    Opened once before the app serves traffic and disposed on shutdown.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = _create_engine(url)
        self._session_factory = sessionmaker(
            bind=self.engine,
            class_=Session,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def open(self) -> None:
        """Create all database tables."""
        SQLModel.metadata.create_all(bind=self.engine)
        logger.info("Database ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a database session (context manager style).

        Usage:
            with database.session() as session:
                # do something with session
        """
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency to get a database session from the app's pool."""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db
