import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from userstore.config import settings
from userstore.database import init_db
from userstore.repository import UserRepository


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    # Lowest cost bcrypt accepts; keeps the suite quick.
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest.fixture
async def session_factory():
    """Provide an isolated in-memory database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def repo(session_factory):
    return UserRepository(session_factory)
