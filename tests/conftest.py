import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

from src.database import get_db
from src.llm.factory import clear_llm_cache
from src.main import app

# No test here talks to Postgres: services are exercised against fakes, and
# routers against a mocked session with the service layer patched.


def scalars_result(rows):
    """Mimic the ``Result`` returned by ``AsyncSession.execute`` for a row list."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(rows)
    result.scalar_one_or_none.return_value = rows[0] if rows else None
    result.scalar.return_value = len(rows)
    return result


@pytest.fixture
def make_result():
    return scalars_result


@pytest.fixture(autouse=True)
def _clear_cache():
    """Ensure each test gets a fresh LLM instance."""
    clear_llm_cache()
    yield
    clear_llm_cache()


@pytest.fixture
def db_session() -> AsyncMock:
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    # Override the get_db dependency to use our test session
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
