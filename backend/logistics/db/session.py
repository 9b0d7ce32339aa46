"""
Database client lifecycle and session management.

The application owns exactly one ``Database`` instance, created in the
FastAPI lifespan and stored on ``app.state``. Request handlers get sessions
through the ``get_db`` dependency; nothing reaches the engine through a
module-level global.
"""
import logging
from typing import Any, Dict, Generator, Optional
from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from logistics.core.config import Settings, settings
from logistics.core.exceptions import ServiceUnavailableError
from logistics.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Explicitly owned SQLAlchemy client.

    Supports SQLite (tests, local runs), MySQL/MariaDB and PostgreSQL.
    ``open`` is idempotent; ``close`` disposes the pool and may be followed
    by another ``open``.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        connect_timeout: int = 5,
    ):
        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.connect_timeout = connect_timeout
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "Database":
        return cls(
            config.DATABASE_URL,
            echo=config.DB_ECHO,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_timeout=config.DB_POOL_TIMEOUT,
            connect_timeout=config.DB_CONNECT_TIMEOUT,
        )

    @property
    def dialect(self) -> str:
        return make_url(self.database_url).get_backend_name()

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def _engine_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"echo": self.echo, "pool_pre_ping": True}

        if self.dialect == "sqlite":
            kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": self.connect_timeout,
            }
            database = make_url(self.database_url).database
            if not database or database == ":memory:":
                # A private in-memory database only exists on one connection
                kwargs["poolclass"] = StaticPool
            return kwargs

        kwargs.update({
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": 3600,
        })
        if self.dialect == "mysql":
            kwargs["connect_args"] = {
                "connect_timeout": self.connect_timeout,
                "read_timeout": self.pool_timeout,
                "write_timeout": self.pool_timeout,
            }
        elif self.dialect == "postgresql":
            kwargs["connect_args"] = {
                "connect_timeout": self.connect_timeout,
                "options": f"-c statement_timeout={self.pool_timeout * 1000}",
            }
        return kwargs

    def open(self) -> None:
        """Create the engine and session factory, then verify connectivity."""
        if self.is_open:
            return

        engine = create_engine(self.database_url, **self._engine_kwargs())
        if self.dialect == "sqlite":
            @event.listens_for(engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.close()

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            engine.dispose()
            logger.error(f"Failed to open database ({self.dialect}): {e}")
            raise ServiceUnavailableError("Database is unavailable") from e

        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info(f"Database opened ({self.dialect})")

    def is_healthy(self) -> bool:
        """True when the database answers a trivial query."""
        if not self.is_open:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        # Models must be imported so they register on Base.metadata
        import logistics.models  # noqa: F401

        if not self.is_open:
            self.open()
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if not self.is_open:
            raise ServiceUnavailableError("Database is not open")
        return self.SessionLocal()

    def close(self) -> None:
        """Dispose pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.SessionLocal = None


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
