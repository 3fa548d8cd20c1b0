"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Pool is bounded: pool_size connections, no overflow
    - Connections older than max lifetime are recycled; idle ones past max idle time are discarded
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Constructed once in the FastAPI lifespan and kept on app.state (no module singleton)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - SQLite (tests, local dev) skips pool sizing and turns on foreign keys so
      ON DELETE CASCADE behaves like PostgreSQL
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, DisconnectionError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from qna.core.errors import DatabaseError
from qna.db.base import Base

logger = logging.getLogger(__name__)

_LAST_CHECKIN = "qna_last_checkin"


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_lifetime: float = 3600.0,
        max_idle_time: float = 300.0,
        sslmode: str | None = None,
    ):
        url = make_url(database_url)
        self.is_sqlite = url.get_backend_name() == "sqlite"
        self.max_idle_time = max_idle_time

        engine_kwargs: dict = {"pool_pre_ping": True}
        if not self.is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=0,
                pool_recycle=int(max_lifetime),
            )
            if sslmode:
                engine_kwargs["connect_args"] = {"ssl": sslmode}

        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            event.listen(self.engine.sync_engine, "checkin", _record_checkin)
            event.listen(self.engine.sync_engine, "checkout", self._discard_idle)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown") from e
        finally:
            await session.close()

    async def ping(self) -> None:
        """Round-trip to the store; raises DatabaseError when unreachable."""
        async with self.session() as db:
            await db.execute(text("SELECT 1"))

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.ping()
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def create_schema(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        import qna.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    def _discard_idle(self, dbapi_connection, connection_record, connection_proxy):
        last_checkin = connection_record.info.pop(_LAST_CHECKIN, None)
        if last_checkin is None:
            return
        if time.monotonic() - last_checkin > self.max_idle_time:
            # Pool invalidates the record and retries with a fresh connection.
            raise DisconnectionError("connection exceeded max idle time")


def _record_checkin(dbapi_connection, connection_record):
    connection_record.info[_LAST_CHECKIN] = time.monotonic()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
