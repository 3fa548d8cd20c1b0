"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach a real PostgreSQL: every store is a fresh SQLite file under tmp_path
    - fake_service is an AsyncMock with QnaService's interface (handler tests)
    - db_manager has the schema created before the test runs
"""

import os
from unittest.mock import AsyncMock

import pytest

# Ensure tests don't accidentally pick up a real store from the environment
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from qna.config import Settings  # noqa: E402
from qna.infrastructure.database import DatabaseSessionManager  # noqa: E402
from qna.infrastructure.repository import QnaRepository  # noqa: E402
from qna.services.qna_service import QnaService  # noqa: E402


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'qna.db'}",
        log_format="text",
    )


@pytest.fixture
async def db_manager(settings):
    db = DatabaseSessionManager(settings.resolved_database_url)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def repository(db_manager) -> QnaRepository:
    return QnaRepository(db_manager)


@pytest.fixture
def fake_service():
    return AsyncMock(spec=QnaService)
