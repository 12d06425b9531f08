"""
Database connection and session management.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from rolekeeper.core.config import DATABASE_POOL_SIZE, Settings
from rolekeeper.core.errors import PersistenceError

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Explicitly managed database handle.

    Owns one pooled engine and the session factory built on it. Open it at
    process start, hand it to the repositories, and close it on shutdown.
    """

    def __init__(self, url: Union[str, URL], pool_size: int = DATABASE_POOL_SIZE, **engine_kwargs):
        self.url = make_url(url)
        self.pool_size = pool_size
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle from loaded settings."""
        return cls(
            settings.database_url,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            echo=settings.database_echo,  # Log SQL queries when enabled
        )

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    def _engine_options(self) -> dict:
        if self.is_sqlite and self.url.database in (None, "", ":memory:"):
            # In-memory SQLite lives in a single connection
            options = {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        else:
            options = {
                "pool_size": self.pool_size,
                "max_overflow": 0,
                "pool_pre_ping": True,
            }
        options.update(self.engine_kwargs)
        return options

    def open(self) -> "Database":
        """Create the engine and session factory. Connections are made lazily."""
        if self.is_open:
            return self

        self.engine = create_engine(self.url, **self._engine_options())
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created for {self.url.render_as_string(hide_password=True)}")
        return self

    def close(self) -> None:
        """Dispose of the engine and every pooled connection."""
        if not self.is_open:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Database connections closed")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Provide a request-scoped session.

        Commits when the block exits cleanly, rolls back on any exception
        and always closes the session.
        """
        if not self.is_open:
            raise PersistenceError.not_open()

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        """Create all model tables that do not exist yet."""
        if not self.is_open:
            raise PersistenceError.not_open()
        # Import models so they register with the metadata
        import rolekeeper.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        """Drop all model tables."""
        if not self.is_open:
            raise PersistenceError.not_open()
        import rolekeeper.models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)
