"""Database connection and session management."""
from typing import Any, Dict, Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from evcharge.config import Settings
from evcharge.utils.logger import logger


class Base(DeclarativeBase):
    """Declarative base for all models."""


class DatabaseUnavailableError(RuntimeError):
    """Raised when the storage backend cannot be reached."""


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one process.

    Built once at startup and handed to request handlers through
    ``app.state``.
    """

    def __init__(self, settings: Settings):
        self.url = make_url(settings.database_url)
        self.engine = create_engine(
            settings.database_url,
            echo=False,
            **self._engine_options(settings),
        )
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def _engine_options(self, settings: Settings) -> Dict[str, Any]:
        connect_timeout = settings.db_connect_timeout_seconds
        socket_timeout = settings.db_socket_timeout_seconds

        if self.url.get_backend_name() == "sqlite":
            options: Dict[str, Any] = {
                "connect_args": {"timeout": socket_timeout, "check_same_thread": False},
            }
            # A memory database only lives as long as its single connection
            if self.url.database in (None, "", ":memory:"):
                options["poolclass"] = StaticPool
            return options

        if self.url.get_backend_name() == "postgresql":
            return {
                "pool_size": 20,
                "max_overflow": 10,
                "pool_timeout": connect_timeout,
                "pool_pre_ping": True,
                "connect_args": {
                    "connect_timeout": connect_timeout,
                    "options": f"-c statement_timeout={socket_timeout * 1000}",
                },
            }

        return {"pool_timeout": connect_timeout, "pool_pre_ping": True}

    def verify_connection(self) -> None:
        """
        Run a trivial query against the backend.

        Raises:
            DatabaseUnavailableError: If the backend cannot be reached
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: backend={self.url.get_backend_name()} error={e}")
            raise DatabaseUnavailableError("Could not connect to the database") from e
        logger.info(f"Connected to database: backend={self.url.get_backend_name()}")

    def create_tables(self) -> None:
        """Create all tables and indexes that do not exist yet."""
        # Import models so they register on the metadata
        from evcharge import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
