import os
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# до импорта приложения: тесты гоняем на in-memory хранилище
os.environ["STORAGE"] = "memory"
os.environ["SENTRY_DSN"] = ""  # отключаем Sentry

from filmorate_api.core.config import settings  # noqa: E402
from filmorate_api.db.memory import reset_memory_store  # noqa: E402
from filmorate_api.main import app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env():
    settings.storage = "memory"
    settings.sentry_dsn = ""


@pytest.fixture(autouse=True)
def clean_store():
    """Свежее in-memory хранилище на каждый тест."""
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
async def client():
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac
