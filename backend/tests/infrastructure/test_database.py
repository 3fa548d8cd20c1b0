"""DatabaseSessionManager — connectivity, error mapping and pool hygiene."""

import time
from types import SimpleNamespace

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DisconnectionError

from qna.core.errors import DatabaseError
from qna.infrastructure.database import _LAST_CHECKIN, DatabaseSessionManager


@pytest.mark.asyncio
async def test_ping_and_health_check(db_manager):
    await db_manager.ping()

    assert await db_manager.health_check() is True


@pytest.mark.asyncio
async def test_health_check_unreachable_store(tmp_path):
    db = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'qna.db'}",
    )
    try:
        assert await db.health_check() is False
    finally:
        await db.dispose()


@pytest.mark.asyncio
async def test_sqlalchemy_errors_become_database_errors(db_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with db_manager.session() as session:
            await session.execute(text("SELECT * FROM no_such_table"))

    assert exc_info.value.public_message == "internal server error"
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_foreign_keys_enabled_on_sqlite(db_manager):
    async with db_manager.session() as session:
        result = await session.execute(text("PRAGMA foreign_keys"))

    assert result.scalar() == 1


@pytest.fixture
async def pg_manager():
    db = DatabaseSessionManager(
        "postgresql+asyncpg://u:p@localhost:5432/qna",
        pool_size=3,
        max_idle_time=60.0,
    )
    yield db
    await db.dispose()


@pytest.mark.asyncio
async def test_postgres_pool_is_bounded(pg_manager):
    assert pg_manager.is_sqlite is False
    assert pg_manager.engine.pool.size() == 3


def _record(last_checkin=None):
    info = {} if last_checkin is None else {_LAST_CHECKIN: last_checkin}
    return SimpleNamespace(info=info)


@pytest.mark.asyncio
async def test_fresh_connection_passes_checkout(pg_manager):
    pg_manager._discard_idle(None, _record(), None)
    pg_manager._discard_idle(None, _record(time.monotonic()), None)


@pytest.mark.asyncio
async def test_idle_connection_is_discarded_once(pg_manager):
    record = _record(time.monotonic() - 120)

    with pytest.raises(DisconnectionError):
        pg_manager._discard_idle(None, record, None)

    # The replacement connection on the same record is not rejected again.
    pg_manager._discard_idle(None, record, None)
