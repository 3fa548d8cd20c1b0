"""API test fixtures — httpx clients over ASGITransport.

Invariants:
    - client: routes wired to fake_service (no store)
    - store_client: routes wired to a real QnaService over the SQLite repository
    - Lifespan is not run; create_app receives a ready service instead
"""

import pytest
from httpx import ASGITransport, AsyncClient

from qna.main import create_app
from qna.services.qna_service import QnaService


@pytest.fixture
async def client(settings, fake_service):
    app = create_app(settings, service=fake_service)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def store_client(settings, repository):
    app = create_app(settings, service=QnaService(repository, repository))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
